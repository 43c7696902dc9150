from qr_studio.schemas.analysis import (
    CalendarEventFields,
    ContactFields,
    PayloadKind,
    TextFields,
    UrlFields,
)
from qr_studio.services.field_extractors import (
    EXTRACTORS,
    extract_calendar_event,
    extract_contact,
    extract_email,
    extract_fields,
    extract_geo,
    extract_phone,
    extract_sms,
    extract_text,
    extract_url,
    extract_whatsapp,
    extract_wifi,
    truncate_title,
)


# ==========================================
# TEXT / TITLES
# ==========================================

def test_text_short_title_is_verbatim():
    fields = extract_text("hello")
    assert fields == TextFields(title="hello", text="hello")


def test_text_title_truncated_when_longer_than_50():
    fields = extract_text("a" * 60)
    assert fields.title == "a" * 47 + "..."
    assert fields.text == "a" * 60


def test_truncate_title_boundary():
    assert truncate_title("b" * 50) == "b" * 50
    assert truncate_title("b" * 51) == "b" * 47 + "..."


# ==========================================
# URL
# ==========================================

def test_url_fields():
    fields = extract_url("https://example.com/path?x=1")
    assert fields == UrlFields(
        title="example.com",
        url="https://example.com/path?x=1",
        protocol="https",
        domain="example.com",
        path="/path",
        query="x=1"
    )


def test_url_without_path_or_query():
    fields = extract_url("http://Example.com")
    assert fields.domain == "example.com"
    assert fields.path == "/"
    assert fields.query is None
    assert fields.protocol == "http"


def test_url_parse_failure_falls_back():
    for raw in ("http://[::1", "https://", "http://host:notaport/"):
        assert extract_url(raw) == UrlFields(title=raw, url=raw)


def test_url_host_with_forbidden_characters_falls_back():
    for raw in ("https://exa mple.com/", "http://a<b>.com", "http://ex%20ample.com/", "http://a|b.com"):
        assert extract_url(raw) == UrlFields(title=raw, url=raw)


def test_url_bracketed_ipv6_host():
    fields = extract_url("http://[::1]:8080/x")
    assert fields.domain == "::1"
    assert fields.path == "/x"


# ==========================================
# WIFI
# ==========================================

def test_wifi_fields():
    fields = extract_wifi("WIFI:T:WPA;S:MyNet;P:secret;H:true;")
    assert fields.ssid == "MyNet"
    assert fields.encryption == "WPA"
    assert fields.password == "secret"
    assert fields.hidden is True
    assert fields.title == "MyNet"


def test_wifi_fields_any_order_and_defaults():
    fields = extract_wifi("WIFI:S:Cafe;;")
    assert fields.ssid == "Cafe"
    assert fields.password == ""
    assert fields.encryption == "WPA/WPA2"
    assert fields.hidden is False


def test_wifi_hidden_only_true():
    assert extract_wifi("WIFI:S:x;H:TRUE;").hidden is True
    assert extract_wifi("WIFI:S:x;H:1;").hidden is False
    assert extract_wifi("WIFI:S:x;H:false;").hidden is False


def test_wifi_without_ssid_titles_with_raw_text():
    fields = extract_wifi("WIFI:T:nopass;;")
    assert fields.ssid == ""
    assert fields.title == "WIFI:T:nopass;;"


# ==========================================
# CONTACT
# ==========================================

VCARD = "\r\n".join([
    "BEGIN:VCARD",
    "VERSION:3.0",
    "N:Doe;Jane",
    "FN:Jane Doe",
    "ORG:Acme Corp",
    "TITLE:Engineer",
    "TEL;TYPE=CELL:+1 555 1234",
    "item1.EMAIL;TYPE=INTERNET:jane@example.com",
    "URL:https://jane.example.com",
    "END:VCARD",
])


def test_contact_fields():
    fields = extract_contact(VCARD)
    assert fields == ContactFields(
        title="Jane Doe",
        name="Jane Doe",
        phone="+1 555 1234",
        email="jane@example.com",
        organization="Acme Corp",
        job_title="Engineer",
        url="https://jane.example.com"
    )


def test_contact_defaults():
    fields = extract_contact("BEGIN:VCARD\nEND:VCARD")
    assert fields.name == "Unknown"
    assert fields.title == "Unknown"
    assert fields.phone is None
    assert fields.email is None
    assert fields.organization is None


def test_contact_patterns_are_case_insensitive_and_line_anchored():
    fields = extract_contact("begin:vcard\nfn:lower\nX-TITLE:nope\ntel:123\nend:vcard")
    assert fields.name == "lower"
    assert fields.phone == "123"
    assert fields.job_title is None


# ==========================================
# EMAIL / PHONE / SMS
# ==========================================

def test_email_fields():
    fields = extract_email("mailto:jane@example.com?subject=Hello%20there&body=See+you")
    assert fields.email == "jane@example.com"
    assert fields.subject == "Hello there"
    assert fields.body == "See you"
    assert fields.title == "jane@example.com"


def test_email_without_params():
    fields = extract_email("MAILTO:jane@example.com")
    assert fields.email == "jane@example.com"
    assert fields.subject is None
    assert fields.body is None


def test_phone_strips_prefix():
    assert extract_phone("tel:+15551234").number == "+15551234"
    assert extract_phone("TEL:+15551234").number == "+15551234"
    assert extract_phone("tel:+15551234").title == "+15551234"


def test_sms_fields():
    fields = extract_sms("smsto:+15551234:Hello: world")
    assert fields.number == "+15551234"
    assert fields.message == "Hello: world"


def test_sms_message_stops_at_line_break():
    fields = extract_sms("smsto:+15551234:line1\nline2")
    assert fields.number == "+15551234"
    assert fields.message == "line1"


def test_email_query_spanning_lines_does_not_match():
    fields = extract_email("mailto:jane@example.com?subject=Hi\nthere")
    assert fields.email == ""
    assert fields.title == "mailto:jane@example.com?subject=Hi\nthere"


def test_sms_without_message():
    fields = extract_sms("SMS:+15551234")
    assert fields.number == "+15551234"
    assert fields.message == ""


# ==========================================
# GEO
# ==========================================

def test_geo_fields():
    fields = extract_geo("geo:48.8584,2.2945,35")
    assert fields.latitude == "48.8584"
    assert fields.longitude == "2.2945"
    assert fields.altitude == "35"
    assert fields.title == "48.8584, 2.2945"


def test_geo_without_altitude():
    assert extract_geo("geo:1.5,-2.5").altitude is None


def test_geo_without_comma_keeps_raw_title():
    fields = extract_geo("geo:nowhere")
    assert fields.latitude == ""
    assert fields.longitude == ""
    assert fields.title == "geo:nowhere"


# ==========================================
# CALENDAR EVENT
# ==========================================

VEVENT = "\n".join([
    "BEGIN:VEVENT",
    "SUMMARY:Team sync",
    "DTSTART:20240115T093000Z",
    "DTEND:20240115",
    "LOCATION:Room 4",
    "DESCRIPTION:Weekly",
    "END:VEVENT",
])


def test_calendar_event_fields():
    fields = extract_calendar_event(VEVENT)
    assert fields == CalendarEventFields(
        title="Team sync",
        summary="Team sync",
        start="2024-01-15 09:30",
        end="2024-01-15",
        location="Room 4",
        description="Weekly"
    )


def test_calendar_event_defaults():
    fields = extract_calendar_event("BEGIN:VEVENT\nDTSTART:next week\nEND:VEVENT")
    assert fields.summary == "No title"
    assert fields.title == "No title"
    assert fields.start == "next week"
    assert fields.end is None
    assert fields.location is None


# ==========================================
# WHATSAPP
# ==========================================

def test_whatsapp_fields():
    fields = extract_whatsapp("https://wa.me/15551234?text=Hi%20there")
    assert fields.number == "15551234"
    assert fields.message == "Hi there"
    assert fields.title == "15551234"


def test_whatsapp_message_parameter_fallback():
    assert extract_whatsapp("https://wa.me/1?message=yo").message == "yo"
    assert extract_whatsapp("https://wa.me/1?text=a&message=b").message == "a"
    assert extract_whatsapp("https://wa.me/1").message is None


# ==========================================
# DISPATCH
# ==========================================

def test_every_kind_has_an_extractor():
    assert set(EXTRACTORS) == set(PayloadKind)


def test_extract_fields_dispatches_by_kind():
    assert extract_fields(PayloadKind.WHATSAPP, "https://wa.me/42").number == "42"
    assert extract_fields(PayloadKind.TEXT, "x") == TextFields(title="x", text="x")


def test_extractors_are_repeatable():
    for kind, extractor in EXTRACTORS.items():
        assert extractor(VCARD) == extractor(VCARD), kind
