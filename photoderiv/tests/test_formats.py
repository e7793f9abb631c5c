"""Tests for the format policy table."""

import pytest

from photoderiv.formats import (
    OutputTree,
    PipelineMode,
    ResizeSpec,
    Role,
    SourceFormat,
    is_metadata_artifact,
    output_trees,
    renditions_for,
)


class TestSourceFormat:
    """Tests for SourceFormat lookup."""

    @pytest.mark.parametrize('filename,expected', [
        ('a.jpg', SourceFormat.JPEG),
        ('a.JPEG', SourceFormat.JPEG),
        ('a.Jpg', SourceFormat.JPEG),
        ('b.PNG', SourceFormat.PNG),
        ('c.txt', None),
        ('noext', None),
        ('archive.jpg.zip', None),
    ])
    def test_from_filename(self, filename, expected):
        """Test extension matching is case-insensitive."""
        assert SourceFormat.from_filename(filename) is expected


class TestMetadataArtifacts:
    """Tests for metadata artifact detection."""

    def test_known_artifacts(self):
        """Test file manager droppings are recognised."""
        assert is_metadata_artifact('.DS_Store')
        assert is_metadata_artifact('Thumbs.db')
        assert is_metadata_artifact('._a.jpg')

    def test_regular_photo(self):
        """Test ordinary photos are not artifacts."""
        assert not is_metadata_artifact('a.jpg')


class TestPipelineMode:
    """Tests for mode allowlists and renditions."""

    def test_basic_accepts_only_jpeg(self):
        """Test basic mode excludes PNG."""
        assert PipelineMode.BASIC.formats == frozenset({SourceFormat.JPEG})

    def test_extended_accepts_jpeg_and_png(self):
        """Test extended mode accepts PNG."""
        assert PipelineMode.EXTENDED.formats == frozenset({SourceFormat.JPEG, SourceFormat.PNG})

    def test_basic_renditions(self):
        """Test basic mode has a single JPEG full derivative."""
        specs = renditions_for(PipelineMode.BASIC, SourceFormat.JPEG)

        assert len(specs) == 1
        assert specs[0].role is Role.FULL
        assert specs[0].preset.format == 'JPEG'
        assert specs[0].preset.options['quality'] == 92
        assert 'subsampling' not in specs[0].preset.options

    def test_extended_renditions(self):
        """Test extended mode has WebP full and JPEG preview."""
        specs = {spec.role: spec for spec in renditions_for(PipelineMode.EXTENDED, SourceFormat.PNG)}

        assert specs[Role.FULL].preset.format == 'WEBP'
        assert specs[Role.FULL].preset.options['quality'] == 100
        assert specs[Role.FULL].tree is OutputTree.PUBLIC
        assert specs[Role.PREVIEW].preset.format == 'JPEG'
        assert specs[Role.PREVIEW].preset.options['quality'] == 80
        assert specs[Role.PREVIEW].tree is OutputTree.IMAGES

    def test_unsupported_combination(self):
        """Test PNG has no renditions in basic mode."""
        assert renditions_for(PipelineMode.BASIC, SourceFormat.PNG) == ()

    def test_output_trees(self):
        """Test which trees each mode writes to."""
        assert output_trees(PipelineMode.BASIC) == (OutputTree.IMAGES,)
        assert output_trees(PipelineMode.EXTENDED) == (OutputTree.IMAGES, OutputTree.PUBLIC)


class TestRenditionFilenames:
    """Tests for derivative naming."""

    def test_full_webp_name(self):
        """Test full-size derivative uses the web format extension."""
        full, _ = renditions_for(PipelineMode.EXTENDED, SourceFormat.JPEG)
        assert full.filename('abc123', '.JPG') == 'abc123.webp'

    def test_preview_keeps_source_extension(self):
        """Test preview keeps the source extension and its case."""
        _, preview = renditions_for(PipelineMode.EXTENDED, SourceFormat.JPEG)
        assert preview.filename('abc123', '.JPG') == 'abc123-preview.JPG'

    def test_basic_keeps_source_extension(self):
        """Test basic derivative keeps the source extension."""
        (full,) = renditions_for(PipelineMode.BASIC, SourceFormat.JPEG)
        assert full.filename('abc123', '.jpeg') == 'abc123.jpeg'


class TestResizeSpec:
    """Tests for contain-fit target sizes."""

    def test_height_bound(self):
        """Test height-bounded resize keeps aspect ratio."""
        assert ResizeSpec('height', 900).target_size(1600, 1200) == (1200, 900)

    def test_width_bound(self):
        """Test width-bounded resize keeps aspect ratio."""
        assert ResizeSpec('width', 610).target_size(1600, 1200) == (610, 458)

    def test_no_enlargement(self):
        """Test smaller images are left alone."""
        assert ResizeSpec('height', 900).target_size(300, 200) == (300, 200)
        assert ResizeSpec('width', 610).target_size(610, 2000) == (610, 2000)

    def test_enlargement_when_allowed(self):
        """Test enlarge=True scales small images up."""
        assert ResizeSpec('height', 900, enlarge=True).target_size(300, 300) == (900, 900)
