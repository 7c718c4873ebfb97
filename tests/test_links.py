from __future__ import annotations

import pytest

from utils.links import extract_file_id, extract_file_ids, extract_urls


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://docs.google.com/document/d/1AbC-xyz_09/edit", "1AbC-xyz_09"),
        ("https://docs.google.com/spreadsheets/d/SHEET123/edit#gid=0", "SHEET123"),
        ("https://docs.google.com/presentation/d/SLIDES/view?usp=sharing", "SLIDES"),
        ("https://drive.google.com/file/d/FILE42/view", "FILE42"),
        ("https://drive.google.com/drive/folders/FOLDER7", "FOLDER7"),
        ("https://drive.google.com/drive/u/0/folders/FOLDER8?usp=drive_link", "FOLDER8"),
        ("http://DRIVE.GOOGLE.COM/file/d/UPPER/view", "UPPER"),
    ],
)
def test_extract_file_id(url: str, expected: str) -> None:
    assert extract_file_id(url) == expected


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/document/d/NOPE/edit",
        "https://drive.google.com.evil.com/file/d/NOPE/view",
        "https://drive.google.com/drive/my-drive",
        "https://docs.google.com/document/d/",
        "ftp://drive.google.com/file/d/NOPE",
    ],
)
def test_extract_file_id_rejects_other_urls(url: str) -> None:
    assert extract_file_id(url) is None


def test_extract_file_id_skips_segments_that_are_not_ids() -> None:
    assert extract_file_id("https://docs.google.com/document/d/%20%20/ID9/edit") == "ID9"


def test_extract_urls_trims_punctuation_and_brackets() -> None:
    text = (
        "see https://drive.google.com/file/d/A1/view. "
        "(also https://docs.google.com/document/d/B2/edit) "
        "and <https://docs.google.com/spreadsheets/d/C3/edit>!"
    )

    assert extract_urls(text) == [
        "https://drive.google.com/file/d/A1/view",
        "https://docs.google.com/document/d/B2/edit",
        "https://docs.google.com/spreadsheets/d/C3/edit",
    ]


def test_extract_urls_keeps_balanced_parentheses() -> None:
    assert extract_urls("https://en.wikipedia.org/wiki/Foo_(bar)") == [
        "https://en.wikipedia.org/wiki/Foo_(bar)"
    ]


def test_extract_file_ids_is_distinct_and_ordered() -> None:
    text = (
        "https://docs.google.com/document/d/B/edit "
        "https://example.com/x "
        "https://drive.google.com/file/d/A/view "
        "https://docs.google.com/document/d/B/view"
    )

    assert extract_file_ids(text) == ["B", "A"]


def test_extract_file_ids_without_links() -> None:
    assert extract_file_ids("no links here, just drive.google.com text") == []
