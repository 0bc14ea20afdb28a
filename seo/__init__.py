"""SEO URL resolution, page metadata and sitemap generation."""
