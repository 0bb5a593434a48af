import zlib

import pytest

from cetatenie.decree import DecreeFormatError, FindState, get_year, read_pdf, search_text
from cetatenie.pdftext import PdfError


def make_pdf(pages):
    count = len(pages)
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(count))
    bodies = [b"<< /Type /Catalog /Pages 2 0 R >>",
              f"<< /Type /Pages /Kids [{kids}] /Count {count} >>".encode()]
    for i, text in enumerate(pages):
        content = zlib.compress(b"BT (" + text.encode("latin-1") + b") Tj ET")
        bodies.append(f"<< /Type /Page /Parent 2 0 R /Contents {4 + 2 * i} 0 R >>".encode())
        bodies.append(b"<< /Length " + str(len(content)).encode()
                      + b" /Filter /FlateDecode >>\nstream\n" + content + b"\nendstream")
    out = bytearray(b"%PDF-1.4\n")
    for num, body in enumerate(bodies, start=1):
        out += f"{num} 0 obj\n".encode() + body + b"\nendobj\n"
    return bytes(out)


def test_get_year_valid():
    assert get_year("123/RD/2023") == 2023


@pytest.mark.parametrize(
    "search, message",
    [
        ("123/XX/2023", "format invalid"),
        ("123/RD", "format invalid"),
        ("123/RD/99999", "anul trebuie să aibă 4 cifre"),
        ("123/RD/abcd", "an invalid: abcd"),
        ("1/RD/1999", "anul 1999 este în afara intervalului valid"),
    ],
)
def test_get_year_errors(search, message):
    with pytest.raises(DecreeFormatError, match=message):
        get_year(search)


@pytest.mark.parametrize(
    "text, label",
    [
        ("nothing here", "Not Found"),
        ("5/RD/2020 pending", "Found but not resolved"),
        ("5/RD/2020 12.01.2021 /P/", "Found and resolved"),
    ],
)
def test_state_labels(text, label):
    assert str(search_text(text, "5/RD/2020")) == label


def test_search_text_states():
    assert search_text("nothing here", "5/RD/2020") is FindState.NOT_FOUND
    assert search_text("5/RD/2020 12.01.2021 /P/", "5/RD/2020") is FindState.FOUND_AND_RESOLVED
    assert search_text("5/RD/2020 pending", "5/RD/2020") is FindState.FOUND_BUT_NOT_RESOLVED


def test_mark_beyond_window_is_not_resolved():
    text = "5/RD/2020" + " " * 50 + "/P/"
    assert search_text(text, "5/RD/2020") is FindState.FOUND_BUT_NOT_RESOLVED


def test_read_pdf_finds_on_later_page():
    data = make_pdf(["other", "1/RD/2022 x", "77/RD/2022 ok /P/"])
    assert read_pdf(data, "77/RD/2022") is FindState.FOUND_AND_RESOLVED
    assert read_pdf(data, "1/RD/2022") is FindState.FOUND_BUT_NOT_RESOLVED
    assert read_pdf(data, "9/RD/2022") is FindState.NOT_FOUND


def test_read_pdf_bad_data():
    with pytest.raises(PdfError):
        read_pdf(b"garbage", "1/RD/2022")