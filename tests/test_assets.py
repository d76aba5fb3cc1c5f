"""Tests for the filesystem image loader."""

import pytest

from campus_tour.assets import FileImageLoader


@pytest.fixture
def asset_root(tmp_path):
    images = tmp_path / "images"
    images.mkdir()
    (images / "a.jpg").write_bytes(b"\xff\xd8\xff")
    return tmp_path


class TestFileImageLoader:
    """Tests for FileImageLoader."""

    @pytest.mark.asyncio
    async def test_existing_file(self, asset_root):
        """Readable files load."""
        loader = FileImageLoader(asset_root)
        assert await loader("/images/a.jpg") is True
        assert await loader("images/a.jpg") is True

    @pytest.mark.asyncio
    async def test_missing_file(self, asset_root):
        """Missing files fail."""
        assert await FileImageLoader(asset_root)("/images/missing.jpg") is False

    @pytest.mark.asyncio
    async def test_directory_is_not_an_image(self, asset_root):
        """Directories are not loadable images."""
        assert await FileImageLoader(asset_root)("/images") is False

    @pytest.mark.asyncio
    async def test_outside_root_rejected(self, asset_root):
        """References escaping the asset root are refused."""
        (asset_root.parent / "secret.jpg").write_bytes(b"x")
        loader = FileImageLoader(asset_root)
        assert loader.resolve("../secret.jpg") is None
        assert await loader("../secret.jpg") is False

    def test_resolve(self, asset_root):
        """resolve maps references under the root."""
        loader = FileImageLoader(str(asset_root))
        assert loader.resolve("/images/a.jpg") == (asset_root / "images" / "a.jpg").resolve()
