from event_checkin.registrants.badge import badge_code, parse_badge_code, render_badge_png


def test_badge_code_parses_back_to_id():
    assert badge_code(17) == "REG-17"
    assert parse_badge_code(" reg-17 ") == 17


def test_foreign_codes_are_rejected():
    assert parse_badge_code("OFFICE_CHECKIN_SYSTEM") is None
    assert parse_badge_code("REG-abc") is None
    assert parse_badge_code("") is None


def test_badge_is_png():
    assert render_badge_png(5).startswith(b"\x89PNG")
