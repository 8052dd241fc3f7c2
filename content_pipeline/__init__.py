# Content Directory Build Pipeline
# Validates JSON content and generates modules, static APIs, sitemaps and SEO pages

from .build_cache import BuildCache, HashCache
from .content_builder import ContentBuilder
from .content_parser import ContentParser, ContentValidationError
from .static_api import StaticAPIGenerator

__all__ = [
    'BuildCache', 'HashCache', 'ContentBuilder', 'ContentParser',
    'ContentValidationError', 'StaticAPIGenerator',
]
