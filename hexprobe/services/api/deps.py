# hexprobe/services/api/deps.py
from __future__ import annotations

from functools import lru_cache

from hexprobe.domain.ports.probe import MediaProbePort
from hexprobe.services.engine import MediaEngine


@lru_cache(maxsize=1)
def get_engine() -> MediaEngine:
    """
    Provide the MediaEngine via DI. Stateless collaborators, so one instance
    serves every request; tests override this dependency.
    """
    return MediaEngine()


def get_media_probe() -> MediaProbePort:
    return get_engine().prober
