"""
Pytest fixtures for photoderiv tests.
"""

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest
from PIL import Image


@pytest.fixture
def logger():
    """Fixture providing a logger."""
    return logging.getLogger('test')


@pytest.fixture
def make_image():
    """Fixture providing a factory that writes a solid-color image to disk."""
    def _make(path, size=(1600, 1200), fmt='JPEG', mode='RGB', color='red', exif=None):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        img = Image.new(mode, size, color=color)
        kwargs = {}
        if exif is not None:
            kwargs['exif'] = exif
        img.save(path, format=fmt, **kwargs)
        return path
    return _make


@pytest.fixture
def site(tmp_path, make_image):
    """
    Fixture providing a site layout with one album, 'travel'.

    travel-source holds a.jpg (1600x1200), b.PNG (800x1000, RGBA),
    .DS_Store and c.txt.
    """
    content = tmp_path / 'src' / 'content' / 'photos'
    images = tmp_path / 'src' / 'assets' / 'images'
    public = tmp_path / 'public'

    (content / 'travel').mkdir(parents=True)
    source = images / 'travel-source'
    make_image(source / 'a.jpg', size=(1600, 1200))
    make_image(source / 'b.PNG', size=(800, 1000), fmt='PNG', mode='RGBA', color=(0, 0, 255, 128))
    (source / '.DS_Store').write_bytes(b'\x00\x00\x00\x01Bud1')
    (source / 'c.txt').write_text('notes')
    public.mkdir()

    return SimpleNamespace(
        root=tmp_path,
        content=content,
        images=images,
        public=public,
        public_images=public / 'images',
        source=source,
    )


@pytest.fixture
def build_driver(site, logger):
    """Fixture providing a factory for PipelineDriver over the site layout."""
    from photoderiv.album_discovery import AlbumDiscovery
    from photoderiv.derivative_generator import DerivativeGenerator
    from photoderiv.formats import PipelineMode
    from photoderiv.hash_allocator import HashAllocator
    from photoderiv.pipeline import PipelineDriver

    def _build(mode=PipelineMode.EXTENDED, naming='random', dry_run=False, generator_cls=DerivativeGenerator):
        discovery = AlbumDiscovery(
            content_root=str(site.content),
            images_root=str(site.images),
            public_images_root=str(site.public_images),
            mode=mode,
            logger=logger,
        )
        generator = generator_cls(mode=mode, allocator=HashAllocator(naming), logger=logger)
        return PipelineDriver(discovery, generator, workers=2, dry_run=dry_run, logger=logger)

    return _build


@pytest.fixture
def travel_album(site):
    """Fixture providing the extended-mode Album for 'travel' with output dirs created."""
    from photoderiv.album import Album
    from photoderiv.formats import OutputTree

    images_out = site.images / 'travel'
    public_out = site.public_images / 'travel'
    images_out.mkdir(parents=True)
    public_out.mkdir(parents=True)

    return Album(
        name='travel',
        source_dir=str(site.source),
        output_dirs={
            OutputTree.IMAGES: str(images_out),
            OutputTree.PUBLIC: str(public_out),
        },
    )


@pytest.fixture
def sample_stats():
    """Fixture providing run statistics for two albums."""
    from photoderiv.generation_stats import GenerationStats

    stats = GenerationStats()
    travel = stats.album('travel')
    travel.status = 'processed'
    travel.total_eligible = 3
    travel.processed = 2
    travel.errors = 1
    travel.skipped = 1
    travel.bytes_generated = 2048
    stats.album('archive').status = 'source_missing'
    stats.error_details.append('[travel] Error resizing broken.jpg: cannot read source')
    return stats
