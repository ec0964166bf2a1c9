from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .parsing import parse_currency, parse_locale, parse_rounding, parse_tier
from .tip_core import RoundingMode, ServiceTier

logger = logging.getLogger(__name__)

PROFILE_FILENAME = "tiptime_profiles.json"


class ProfileError(RuntimeError):
    """Raised when a profiles file cannot be read, parsed or written."""


@dataclass
class Profile:
    """Saved calculator defaults; unset fields fall through to the config."""

    tier: Optional[ServiceTier] = None
    rounding: Optional[RoundingMode] = None
    currency: Optional[str] = None
    locale: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {}
        if self.tier is not None:
            payload["service"] = self.tier.value
        if self.rounding is not None:
            payload["rounding"] = self.rounding.value
        if self.currency:
            payload["currency"] = self.currency
        if self.locale:
            payload["locale"] = self.locale
        return payload

    @classmethod
    def from_payload(cls, name: str, payload: dict) -> "Profile":
        try:
            tier = parse_tier(payload["service"]) if "service" in payload else None
            rounding = parse_rounding(payload["rounding"]) if "rounding" in payload else None
            currency = parse_currency(payload["currency"]) if payload.get("currency") else None
            locale = parse_locale(payload["locale"]) if payload.get("locale") else None
        except ValueError as exc:
            raise ProfileError(f"Profile '{name}' is invalid: {exc}") from exc
        return cls(
            tier=tier,
            rounding=rounding,
            currency=currency,
            locale=locale,
        )


def _profiles_path() -> Path:
    override = os.environ.get("TIPTIME_PROFILES_PATH")
    if override:
        return Path(override).expanduser()
    return Path.cwd() / PROFILE_FILENAME


def load_profiles() -> Dict[str, dict]:
    path = _profiles_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ProfileError(f"Failed to parse profiles file: {path}") from exc
    if not isinstance(data, dict):
        raise ProfileError("Profiles file must contain a JSON object")
    return {str(k): v for k, v in data.items() if isinstance(v, dict)}


def get_profile(name: str) -> Optional[Profile]:
    payload = load_profiles().get(name)
    if payload is None:
        return None
    return Profile.from_payload(name, payload)


def save_profile(name: str, profile: Profile) -> Path:
    profiles = load_profiles()
    profiles[name] = profile.to_payload()
    path = _profiles_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(profiles, indent=2, sort_keys=True))
    except OSError as exc:
        raise ProfileError(f"Failed to write profiles file: {path}") from exc
    logger.debug("Saved profile %r to %s", name, path)
    return path
