from datetime import date

from utils.ids import avatar_label, normalize_phone, route_id_for, token_hash


def test_route_id_is_deterministic_per_ward_and_day():
    assert route_id_for(date(2025, 3, 10), 4) == "2025-03-10_w4"
    assert route_id_for(date(2025, 3, 10), 4) != route_id_for(date(2025, 3, 10), 5)


def test_token_hash():
    assert len(token_hash("abc")) == 64
    assert token_hash("abc") != token_hash("abd")


def test_avatar_label():
    assert avatar_label("Ravi Kumar") == "RA"
    assert avatar_label("42") == "U"


def test_normalize_phone():
    assert normalize_phone(" 98470-54300 ") == "9847054300"
    assert normalize_phone("+91 98470 54300") == "+919847054300"
