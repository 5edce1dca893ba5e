import pytest

from stacker_core.csv_import import SAMPLE_CSV, CsvImportError, parse_panel_csv
from stacker_core.models import Panel


def test_sample_csv_parses_four_panels():
    panels, next_id = parse_panel_csv(SAMPLE_CSV, start_id=1)

    assert next_id == 5
    assert panels[0] == Panel(1, "sp101", 127, 24, 91, 30)
    assert panels[3] == Panel(4, "sp104", 96, 24, 120, 20)


def test_header_is_case_insensitive_and_any_order():
    text = "AngleDeg, Label ,LENGTH,width,radius,notes\n45,arch,100,20,60,spare"
    panels, _ = parse_panel_csv(text, start_id=10)

    assert panels == [Panel(10, "arch", 100, 20, 60, 45)]


def test_missing_column_raises_with_details():
    with pytest.raises(CsvImportError) as excinfo:
        parse_panel_csv("label,length,width,angleDeg\nA,1,2,3", start_id=1)

    assert excinfo.value.missing == ["radius"]
    assert excinfo.value.found == ["label", "length", "width", "angledeg"]
    assert "found: label, length, width, angledeg" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_blank_rows_are_skipped():
    text = "label,length,width,radius,angleDeg\r\n\r\nA,1,2,3,4\r\n   \r\nB,5,6,7,8\r\n"
    panels, next_id = parse_panel_csv(text, start_id=1)

    assert [panel.label for panel in panels] == ["A", "B"]
    assert next_id == 3


def test_short_rows_and_bad_numbers_default():
    text = "label,length,width,radius,angleDeg\nA,12,x\n,,,,"
    panels, _ = parse_panel_csv(text, start_id=1)

    assert panels[0] == Panel(1, "A", 12, 0, 0, 0)
    assert panels[1] == Panel(2, "", 0, 0, 0, 0)


def test_quoted_label_may_contain_comma():
    text = 'label,length,width,radius,angleDeg\n"Arch, left",100,20,60,45'
    panels, _ = parse_panel_csv(text, start_id=1)
    assert panels[0].label == "Arch, left"


def test_blank_text_returns_no_panels():
    assert parse_panel_csv("", start_id=7) == ([], 7)
    assert parse_panel_csv(" \n \n", start_id=7) == ([], 7)


def test_header_only_returns_no_panels():
    assert parse_panel_csv("label,length,width,radius,angleDeg", start_id=3) == ([], 3)


def test_stray_quote_does_not_swallow_following_rows():
    text = 'label,length,width,radius,angleDeg\n"12 arch,100,20,60,45\nB,1,2,3,4\nC,5,6,7,8'
    panels, next_id = parse_panel_csv(text, start_id=1)

    assert len(panels) == 3
    assert panels[0] == Panel(1, '"12 arch', 100, 20, 60, 45)
    assert panels[1] == Panel(2, "B", 1, 2, 3, 4)
    assert panels[2] == Panel(3, "C", 5, 6, 7, 8)
    assert next_id == 4


def test_text_after_closing_quote_falls_back_to_comma_split():
    text = 'label,length,width,radius,angleDeg\n"A"x,1,2,3,4'
    panels, _ = parse_panel_csv(text, start_id=1)

    assert panels == [Panel(1, '"A"x', 1, 2, 3, 4)]
