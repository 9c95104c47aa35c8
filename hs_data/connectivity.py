"""Reachability probe run before any remote download."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from hs_core.constants import DEFAULT_PROBE_URL

logger = logging.getLogger("hockeystick")


@dataclass(frozen=True)
class ConnectivityResult:
    """
    Outcome of one connectivity probe.

    Attributes:
        url: Probed URL.
        reachable: True when a connection was opened successfully.
        reason: Failure description when unreachable, else None.
    """

    url: str
    reachable: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.reachable


class ConnectivityProbe:
    """Open and immediately close a connection to check that a URL answers."""

    def __init__(self, session: requests.Session | None = None) -> None:
        self.session = requests.Session() if session is None else session

    def check(self, url: str) -> ConnectivityResult:
        """
        Probe a URL.

        Transport failures and HTTP error statuses are reported as an
        unreachable result, never raised.
        """
        try:
            with self.session.get(url, stream=True) as response:
                status_code = response.status_code
        except requests.RequestException as exc:
            logger.debug(f"Connectivity probe failed for {url}: {exc}")
            return ConnectivityResult(url=url, reachable=False, reason=str(exc))

        if status_code >= 400:
            logger.debug(f"Connectivity probe for {url} returned HTTP {status_code}")
            return ConnectivityResult(url=url, reachable=False, reason=f"HTTP {status_code}")

        logger.debug(f"Connectivity probe succeeded for {url}")
        return ConnectivityResult(url=url, reachable=True)


def is_connected(url: str = DEFAULT_PROBE_URL, session: requests.Session | None = None) -> bool:
    """Return True when ``url`` can be reached."""
    return ConnectivityProbe(session=session).check(url).reachable
