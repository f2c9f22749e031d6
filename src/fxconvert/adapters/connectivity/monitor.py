# src/fxconvert/adapters/connectivity/monitor.py
"""
Connectivity Monitor - Network Reachability Signal

This module holds the latest "is the network reachable" boolean and pushes
every change to registered listeners. The value itself is fed by whoever
observes the network: ReachabilityProbe in the running app, tests calling
publish() directly.

Listeners run on the publishing thread, in registration order, and only when
the value actually changes.

Files that USE this module:
- fxconvert.application.converter_service (subscribes to connectivity changes)
- fxconvert.app (creates the monitor and starts the probe)
- tests.test_connectivity (unit tests)

Files that this module USES:
- requests (HEAD request used as the reachability check)
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

import requests

log = logging.getLogger(__name__)

ConnectivityListener = Callable[[bool], None]


class ConnectivityMonitor:
    """Publishes the latest connectivity state to subscribers."""

    def __init__(self, initially_connected: bool = True):
        self._connected = initially_connected
        self._listeners: List[ConnectivityListener] = []
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._connected

    def subscribe(self, listener: ConnectivityListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ConnectivityListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, connected: bool) -> bool:
        """
        Record a new connectivity value and notify listeners if it changed.

        Args:
            connected: Latest reachability result

        Returns:
            True if the value changed (listeners were notified), False otherwise
        """
        with self._lock:
            if connected == self._connected:
                return False
            self._connected = connected
            listeners = list(self._listeners)

        log.info("Network state changed: %s", "Connected" if connected else "Disconnected")
        for listener in listeners:
            try:
                listener(connected)
            except Exception:
                log.exception("Connectivity listener %r failed", listener)
        return True


class ReachabilityProbe:
    """
    Background thread feeding a ConnectivityMonitor.

    Issues a HEAD request to ``probe_url`` every ``interval_seconds``; any
    HTTP response (whatever the status) counts as reachable, a transport
    error counts as unreachable.
    """

    def __init__(self, monitor: ConnectivityMonitor, probe_url: str,
                 interval_seconds: float = 30, timeout: float = 5):
        """
        Initialize reachability probe.

        Args:
            monitor: Monitor receiving the results
            probe_url: URL checked with a HEAD request
            interval_seconds: Delay between checks
            timeout: HTTP timeout for each check in seconds
        """
        self.monitor = monitor
        self.probe_url = probe_url
        self.interval_seconds = interval_seconds
        self.timeout = timeout
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def check(self) -> bool:
        """Run one reachability check and publish the result."""
        try:
            requests.head(self.probe_url, timeout=self.timeout, allow_redirects=False)
            connected = True
        except requests.exceptions.RequestException as e:
            log.debug("Reachability check against %s failed: %s", self.probe_url, e)
            connected = False
        self.monitor.publish(connected)
        return connected

    def _run(self) -> None:
        while not self._stop.is_set():
            self.check()
            self._stop.wait(self.interval_seconds)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="ReachabilityProbe", daemon=True)
        self._thread.start()
        log.info("Reachability probe started (url=%s, every %ss)", self.probe_url, self.interval_seconds)

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.timeout + 1)
            self._thread = None
