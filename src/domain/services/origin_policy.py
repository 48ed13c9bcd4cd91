"""Domain service deciding which browser origins may call the relay."""
from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple
from urllib.parse import urlparse


class OriginPolicy:
  """Allows exact origins from an allow-list or any host under a trusted suffix.

  Requests without an Origin header (curl, server-to-server) are always allowed.
  """

  def __init__(self, allowed_origins: Iterable[str] = (), allowed_suffixes: Iterable[str] = ()) -> None:
    self._allowed_origins: Tuple[str, ...] = tuple(o.rstrip('/') for o in allowed_origins if o)
    self._allowed_suffixes: Tuple[str, ...] = tuple(
      self._normalize_suffix(s) for s in allowed_suffixes if s
    )

  @property
  def allowed_origins(self) -> Tuple[str, ...]:
    return self._allowed_origins

  @property
  def allowed_suffixes(self) -> Tuple[str, ...]:
    return self._allowed_suffixes

  def is_allowed(self, origin: Optional[str]) -> bool:
    if not origin:
      return True

    host = self._hostname(origin)
    if host is None:
      return False

    if origin in self._allowed_origins:
      return True
    return any(host.endswith(suffix) for suffix in self._allowed_suffixes)

  def origin_regex(self) -> Optional[str]:
    """Regex equivalent of the suffix rules, in the form CORSMiddleware expects."""
    if not self._allowed_suffixes:
      return None
    suffixes = '|'.join(re.escape(s) for s in self._allowed_suffixes)
    return rf'(?i)https?://[^/:?#]+(?:{suffixes})(?::\d+)?'

  @staticmethod
  def _hostname(origin: str) -> Optional[str]:
    try:
      parsed = urlparse(origin)
    except ValueError:
      return None
    if not parsed.scheme or not parsed.hostname:
      return None
    return parsed.hostname

  @staticmethod
  def _normalize_suffix(suffix: str) -> str:
    suffix = suffix.strip().lower()
    return suffix if suffix.startswith('.') else f'.{suffix}'
