from literals import ContextFinder, StructLiteralContext, count_top_level_commas, locate_enclosing_literal


def test_empty_span_has_no_commas() -> None:
    assert count_top_level_commas("") == 0
    assert count_top_level_commas('"hello"') == 0


def test_simple_commas_are_counted() -> None:
    assert count_top_level_commas("a, b, ") == 2
    assert count_top_level_commas('Name: "John", Age: 30, ') == 2


def test_commas_inside_strings_are_ignored() -> None:
    assert count_top_level_commas('"a,b", ') == 1
    assert count_top_level_commas("`a,b`, ") == 1
    assert count_top_level_commas('"hello\\"world, test", ') == 1


def test_raw_strings_do_not_process_escapes() -> None:
    # The backslash does not escape the closing backtick.
    assert count_top_level_commas("`a\\`, b, ") == 2


def test_escaped_backslash_before_quote_closes_string() -> None:
    assert count_top_level_commas('"a\\\\", b, ') == 2


def test_commas_inside_nested_brackets_are_ignored() -> None:
    assert count_top_level_commas("f(a, b), ") == 1
    assert count_top_level_commas("[]int{1, 2, 3}, ") == 1
    assert count_top_level_commas('Address{Street: "123", City: "NYC"}, ') == 1
    assert count_top_level_commas("m[a], x[1:2], ") == 2


def test_unbalanced_closers_do_not_raise() -> None:
    # Depth goes negative and stays there, so later commas are not top level.
    assert count_top_level_commas("a), b, c") == 0
    assert count_top_level_commas("}}}]]),,,") == 0


def test_simple_struct_literal() -> None:
    text = "p := Person{"
    ctx = locate_enclosing_literal(text, 12)
    assert ctx == StructLiteralContext(type_name="Person", type_name_offset=5, active_field_index=0)


def test_pointer_marker_is_stripped() -> None:
    ctx = locate_enclosing_literal("p := &Person{", 13)
    assert ctx is not None
    assert ctx.type_name == "Person"
    assert ctx.type_name_offset == 6


def test_package_qualifier_is_dropped() -> None:
    text = "c := http.Client{"
    ctx = locate_enclosing_literal(text, 18)
    assert ctx is not None
    assert ctx.type_name == "Client"
    assert text[ctx.type_name_offset:].startswith("Client{")


def test_uppercase_qualifier_is_dropped_too() -> None:
    text = "v := Pkg.Value{"
    ctx = locate_enclosing_literal(text, len(text))
    assert ctx is not None
    assert ctx.type_name == "Value"
    assert ctx.type_name_offset == text.index("Value")


def test_field_index_follows_commas() -> None:
    text = 'p := Person{Name: "John", Age: 30, '
    ctx = locate_enclosing_literal(text, len(text))
    assert ctx is not None
    assert ctx.type_name == "Person"
    assert ctx.active_field_index == 2


def test_not_inside_literal() -> None:
    assert locate_enclosing_literal("x := 42", 7) is None
    assert locate_enclosing_literal("", 0) is None
    assert locate_enclosing_literal("p := Person{}", 13) is None


def test_innermost_literal_wins() -> None:
    text = "p := Person{Address: Address{"
    ctx = locate_enclosing_literal(text, len(text))
    assert ctx is not None
    assert ctx.type_name == "Address"
    assert ctx.active_field_index == 0


def test_closed_inner_literal_returns_to_outer() -> None:
    text = 'p := Person{Name: "Bo", Address: Address{City: "X"}, '
    ctx = locate_enclosing_literal(text, len(text))
    assert ctx is not None
    assert ctx.type_name == "Person"
    assert ctx.active_field_index == 2


def test_multiline_literal_with_space_before_brace() -> None:
    text = 'cfg := &Config {\n\tDatabaseURL: "postgres://localhost",\n\tPort: '
    ctx = locate_enclosing_literal(text, len(text))
    assert ctx is not None
    assert ctx.type_name == "Config"
    assert ctx.active_field_index == 1


def test_bracket_composite_literals_are_not_structs() -> None:
    assert locate_enclosing_literal("xs := []int{1, ", 15) is None
    assert locate_enclosing_literal("m := map[string]int{", 20) is None


def test_lowercase_type_and_blocks_are_ignored() -> None:
    assert locate_enclosing_literal("v := point{", 11) is None
    text = "func main() {\n\tx := 1"
    assert locate_enclosing_literal(text, len(text)) is None


def test_cursor_in_middle_of_text() -> None:
    text = "a := Person{Name: 1, Age: 2}"
    # Cursor right after the first comma.
    ctx = locate_enclosing_literal(text, text.index(",") + 1)
    assert ctx is not None
    assert ctx.active_field_index == 1


def test_offset_out_of_range_is_clamped() -> None:
    assert locate_enclosing_literal("p := Person{", 500) is not None
    assert locate_enclosing_literal("p := Person{", -3) is None


def test_context_finder_delegates() -> None:
    finder = ContextFinder()
    assert finder.locate("p := Person{", 12) == locate_enclosing_literal("p := Person{", 12)
    assert finder.count_commas("a, b") == 1
