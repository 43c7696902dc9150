from qr_studio.services.byte_renderer import to_hex_bytes


def test_ascii():
    assert to_hex_bytes("AB") == "41 42"


def test_zero_padding_and_lowercase():
    assert to_hex_bytes("\n\x7f") == "0a 7f"


def test_multibyte_characters_expand_in_order():
    assert to_hex_bytes("é") == "c3 a9"
    assert to_hex_bytes("a€") == "61 e2 82 ac"


def test_empty():
    assert to_hex_bytes("") == ""


def test_lone_surrogate_becomes_replacement_character():
    assert to_hex_bytes("\ud800") == "ef bf bd"
