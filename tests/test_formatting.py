from serverstats import formatting


def test_table_row_pads_all_but_last_column():
    row = formatting.table_row(["USER", "PID", "%CPU", "%MEM", "COMMAND"], [20, 10, 10, 10])

    assert row == "USER                 PID        %CPU       %MEM       COMMAND"


def test_table_row_does_not_truncate_long_values():
    row = formatting.table_row(["averyveryverylongusername", 1, "x"], [5, 3])

    assert row.startswith("averyveryverylongusername 1   x")


def test_humanize_kb_matches_df_h_style():
    assert formatting.humanize_kb(0) == "0"
    assert formatting.humanize_kb(4) == "4.0K"
    assert formatting.humanize_kb(1536) == "1.5M"
    assert formatting.humanize_kb(10239) == "10M"
    assert formatting.humanize_kb(523248) == "511M"
    assert formatting.humanize_kb(490617784) == "468G"


def test_dynamic_text_is_not_parsed_as_markup(console_buffer):
    console, buffer = console_buffer

    formatting.print_line(console, "[kthreadd] sshd[812]: [bold]x[/bold]", indent="  ")
    formatting.print_field(console, "Process", "[kworker/0:1]")

    output = buffer.getvalue()
    assert "  [kthreadd] sshd[812]: [bold]x[/bold]" in output
    assert "Process: [kworker/0:1]" in output


def test_header_error_and_warning_text(console_buffer):
    console, buffer = console_buffer

    formatting.print_header(console, "CPU USAGE")
    formatting.print_error(console, "ps command not available")
    formatting.print_warning(console, "Network tools not available")
    formatting.print_separator(console)

    lines = buffer.getvalue().splitlines()
    assert lines == [
        "",
        "=== CPU USAGE ===",
        "Error: ps command not available",
        "Network tools not available",
        "-" * 48,
    ]


def test_field_without_value_prints_label_only(console_buffer):
    console, buffer = console_buffer

    formatting.print_field(console, "Filesystem Usage")

    assert buffer.getvalue() == "Filesystem Usage:\n"
