"""Slug helpers for posts, categories and tags."""

import logging
import re
import time
from typing import Callable

logger = logging.getLogger(__name__)

MAX_SLUG_LENGTH = 100
MAX_SLUG_ATTEMPTS = 100


def slugify(text: str) -> str:
    """Convert a title to a URL-friendly slug.

    Lowercases, trims, turns whitespace runs into a single hyphen, strips every
    character that is not a lowercase ASCII letter, digit or hyphen, collapses
    repeated hyphens and truncates to 100 characters. The result never starts
    or ends with a hyphen.
    """
    slug = str(text).lower().strip()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^a-z0-9-]+", "", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    slug = slug.strip("-")
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def category_slug(name: str) -> str:
    """Lowercase the name and hyphenate whitespace. No uniqueness check."""
    return re.sub(r"\s+", "-", name.lower())


def tag_slug(name: str) -> str:
    """Lowercase, drop special characters, hyphenate whitespace. No uniqueness check."""
    slug = name.lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip()


def generate_unique_slug(
    title: str,
    slug_exists: Callable[[str], bool],
    max_attempts: int = MAX_SLUG_ATTEMPTS,
) -> str:
    """Derive a slug from ``title`` that ``slug_exists`` reports as free.

    Tries the base slug, then ``base-1``, ``base-2`` and so on. After
    ``max_attempts`` taken answers, or on any error raised by ``slug_exists``,
    falls back to ``base-<epoch millis>``. Titles with no sluggable characters
    use ``post`` as the base.

    Args:
        title: Post title
        slug_exists: Returns True when another record already uses the slug
        max_attempts: Number of existence checks before giving up on the counter

    Returns:
        str: The slug to store
    """
    base_slug = slugify(title) or "post"
    slug = base_slug
    counter = 1

    try:
        while slug_exists(slug):
            if counter > max_attempts - 1:
                raise RuntimeError(
                    f"Failed to generate a unique slug after {max_attempts} attempts"
                )
            slug = f"{base_slug}-{counter}"
            counter += 1
    except Exception as e:
        logger.error(f"Error in generate_unique_slug for title {title!r}: {e}")
        slug = f"{base_slug}-{int(time.time() * 1000)}"

    logger.info(f"Generated slug {slug!r} for title {title!r}")
    return slug
