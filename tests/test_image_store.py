from pathlib import Path

import pytest

from pagescribe.exceptions import ImageDirectoryNotFoundError, ListingError, NoPagesFoundError
from pagescribe.image_store import list_pages, page_path, sequence_number


class TestSequenceNumber:
    def test_reads_leading_integer(self) -> None:
        assert sequence_number("42.png") == 42

    def test_reads_prefix_before_other_text(self) -> None:
        assert sequence_number("7_cover.png") == 7

    def test_missing_prefix_is_zero(self) -> None:
        assert sequence_number("cover.png") == 0


class TestListPagesOrdering:
    def test_orders_numerically_not_lexically(self, tmp_path: Path, make_png) -> None:
        for name in ("2.png", "10.png", "1.png"):
            make_png(tmp_path / name)

        pages = list_pages(tmp_path)

        assert [p.sequence_number for p in pages] == [1, 2, 10]
        assert [p.name for p in pages] == ["1.png", "2.png", "10.png"]

    def test_returns_every_qualifying_file(self, tmp_path: Path, make_png) -> None:
        for n in (5, 300, 17, 4, 1000, 21):
            make_png(tmp_path / f"{n}.png")

        pages = list_pages(tmp_path)

        assert len(pages) == 6
        assert [p.sequence_number for p in pages] == [4, 5, 17, 21, 300, 1000]

    def test_names_without_number_sort_first(self, tmp_path: Path, make_png) -> None:
        make_png(tmp_path / "3.png")
        make_png(tmp_path / "cover.png")

        pages = list_pages(tmp_path)

        assert [p.name for p in pages] == ["cover.png", "3.png"]

    def test_extension_match_is_case_insensitive(self, tmp_path: Path, make_png) -> None:
        make_png(tmp_path / "1.PNG")
        make_png(tmp_path / "2.jpg")

        assert [p.name for p in list_pages(tmp_path)] == ["1.PNG", "2.jpg"]

    def test_ignores_non_image_entries(self, tmp_path: Path, make_png) -> None:
        make_png(tmp_path / "1.png")
        (tmp_path / "2.txt").write_text("notes")
        (tmp_path / "3.png").mkdir()

        assert [p.name for p in list_pages(tmp_path)] == ["1.png"]


class TestListPagesErrors:
    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ImageDirectoryNotFoundError, match="not found"):
            list_pages(tmp_path / "nope")

    def test_empty_directory(self, tmp_path: Path) -> None:
        with pytest.raises(NoPagesFoundError):
            list_pages(tmp_path)

    def test_directory_without_images(self, tmp_path: Path) -> None:
        (tmp_path / "readme.md").write_text("x")

        with pytest.raises(NoPagesFoundError):
            list_pages(tmp_path)

    def test_errors_share_listing_base(self) -> None:
        assert issubclass(ImageDirectoryNotFoundError, ListingError)
        assert issubclass(NoPagesFoundError, ListingError)


class TestPagePath:
    def test_builds_numbered_png(self, tmp_path: Path) -> None:
        assert page_path(tmp_path, 12) == tmp_path / "12.png"


class TestPageImage:
    def test_exposes_bytes_and_size(self, tmp_path: Path, make_png) -> None:
        path = make_png(tmp_path / "4.png", size=(64, 48))

        page = list_pages(tmp_path)[0]

        assert page.read_bytes() == path.read_bytes()
        assert page.size() == (64, 48)
