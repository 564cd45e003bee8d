"""
Citation source allow-listing.

A source is acceptable when its hostname is a trusted health/medical authority
(or a subdomain of one), or sits under a .gov/.edu suffix. Anything that does
not parse as an absolute URL is rejected. No network access.
"""

from typing import Iterable, Optional
from urllib.parse import urlsplit

TRUSTED_DOMAINS = (
    "who.int",
    "cdc.gov",
    "nhs.uk",
    "pubmed.ncbi.nlm.nih.gov",
    "ncbi.nlm.nih.gov",
    "mayoclinic.org",
    "nih.gov",
)

TRUSTED_SUFFIXES = (".gov", ".edu")


def extract_hostname(url) -> Optional[str]:
    """Return the lowercased hostname of an absolute URL, or None."""
    if not isinstance(url, str):
        return None
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
        # urlsplit only validates the port on access
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not hostname:
        return None
    if any(ch.isspace() for ch in hostname):
        return None
    return hostname.lower()


class SourcePolicy:
    """Host-suffix allow-list for citation URLs."""

    def __init__(
        self,
        trusted_domains: Iterable[str] = TRUSTED_DOMAINS,
        trusted_suffixes: Iterable[str] = TRUSTED_SUFFIXES,
    ):
        self.trusted_domains = tuple(d.lower() for d in trusted_domains)
        self.trusted_suffixes = tuple(s.lower() for s in trusted_suffixes)

    def is_allowed(self, url) -> bool:
        hostname = extract_hostname(url)
        if hostname is None:
            return False

        if any(hostname == d or hostname.endswith("." + d) for d in self.trusted_domains):
            return True

        return hostname.endswith(self.trusted_suffixes)

    def disallowed(self, urls: Iterable) -> list:
        """Return the URLs that fail the allow-list, in input order."""
        return [u for u in urls if not self.is_allowed(u)]


_default_policy = SourcePolicy()


def is_allowed_source(url) -> bool:
    """Check a single URL against the default allow-list."""
    return _default_policy.is_allowed(url)
