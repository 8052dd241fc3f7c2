# SEO landing pages generated from content metadata

from .generator import SEOGenerator, generate_collection_page, generate_workflow_guide

__all__ = ['SEOGenerator', 'generate_collection_page', 'generate_workflow_guide']
