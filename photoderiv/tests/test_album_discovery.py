"""Tests for AlbumDiscovery class."""

import os

import pytest

from photoderiv.album_discovery import AlbumDiscovery
from photoderiv.formats import OutputTree, PipelineMode


class TestAlbumDiscovery:
    """Tests for AlbumDiscovery class."""

    @pytest.fixture
    def discovery(self, site, logger):
        """Fixture providing extended-mode discovery over the site."""
        return AlbumDiscovery(
            content_root=str(site.content),
            images_root=str(site.images),
            public_images_root=str(site.public_images),
            logger=logger,
        )

    def test_list_album_names_only_directories(self, site, discovery):
        """Test non-directory entries are excluded and names are sorted."""
        (site.content / 'zoo').mkdir()
        (site.content / 'index.md').write_text('# Photos')

        assert discovery.list_album_names() == ['travel', 'zoo']

    def test_discover_maps_source_and_outputs(self, site, discovery):
        """Test album directories are derived from the name."""
        albums = discovery.discover()

        assert [a.name for a in albums] == ['travel']
        album = albums[0]
        assert album.source_dir == os.path.join(str(site.images), 'travel-source')
        assert album.output_dir(OutputTree.IMAGES) == os.path.join(str(site.images), 'travel')
        assert album.output_dir(OutputTree.PUBLIC) == os.path.join(str(site.public_images), 'travel')

    def test_discover_skips_missing_source(self, site, discovery):
        """Test albums without a source directory are skipped, not errors."""
        (site.content / 'orphan').mkdir()

        albums = discovery.discover()

        assert [a.name for a in albums] == ['travel']
        assert discovery.missing_sources == ['orphan']

    def test_discover_does_not_touch_outputs(self, site, discovery):
        """Test discovery creates no directories."""
        (site.content / 'orphan').mkdir()

        discovery.discover()

        assert not (site.images / 'orphan').exists()
        assert not (site.images / 'travel').exists()

    def test_basic_mode_single_tree(self, site, logger):
        """Test basic mode albums only get the images tree."""
        discovery = AlbumDiscovery(str(site.content), str(site.images), mode=PipelineMode.BASIC, logger=logger)

        album = discovery.discover()[0]

        assert list(album.output_dirs) == [OutputTree.IMAGES]

    def test_extended_mode_requires_public_root(self, site, logger):
        """Test extended mode without a public root is a configuration error."""
        with pytest.raises(ValueError):
            AlbumDiscovery(str(site.content), str(site.images), mode=PipelineMode.EXTENDED, logger=logger)

    def test_missing_content_root(self, tmp_path, logger):
        """Test a missing content root raises."""
        discovery = AlbumDiscovery(
            str(tmp_path / 'nope'), str(tmp_path), str(tmp_path / 'public'), logger=logger
        )

        with pytest.raises(FileNotFoundError):
            discovery.discover()
