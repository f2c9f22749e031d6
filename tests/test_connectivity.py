# tests/test_connectivity.py
"""
Connectivity Tests - Monitor and Reachability Probe

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxconvert.adapters.connectivity.monitor (ConnectivityMonitor, ReachabilityProbe)
- unittest.mock (patching requests.head)
- pytest (testing framework)
"""
from unittest.mock import Mock, patch

import requests

from fxconvert.adapters.connectivity.monitor import ConnectivityMonitor, ReachabilityProbe


class TestConnectivityMonitor:
    def test_initial_value(self):
        assert ConnectivityMonitor().is_connected is True
        assert ConnectivityMonitor(initially_connected=False).is_connected is False

    def test_publish_notifies_on_change(self):
        monitor = ConnectivityMonitor()
        seen = []
        monitor.subscribe(seen.append)

        assert monitor.publish(False) is True
        assert monitor.is_connected is False
        assert seen == [False]

    def test_publish_same_value_is_silent(self):
        monitor = ConnectivityMonitor()
        listener = Mock()
        monitor.subscribe(listener)

        assert monitor.publish(True) is False
        listener.assert_not_called()

    def test_listeners_called_in_registration_order(self):
        monitor = ConnectivityMonitor()
        order = []
        monitor.subscribe(lambda c: order.append("first"))
        monitor.subscribe(lambda c: order.append("second"))

        monitor.publish(False)

        assert order == ["first", "second"]

    def test_unsubscribe(self):
        monitor = ConnectivityMonitor()
        listener = Mock()
        monitor.subscribe(listener)
        monitor.unsubscribe(listener)
        monitor.unsubscribe(listener)

        monitor.publish(False)

        listener.assert_not_called()

    def test_failing_listener_does_not_stop_others(self):
        monitor = ConnectivityMonitor()
        after = Mock()
        monitor.subscribe(Mock(side_effect=RuntimeError("boom")))
        monitor.subscribe(after)

        monitor.publish(False)

        after.assert_called_once_with(False)


class TestReachabilityProbe:
    @patch("fxconvert.adapters.connectivity.monitor.requests.head")
    def test_any_response_is_reachable(self, mock_head):
        mock_head.return_value = Mock(status_code=503)
        monitor = ConnectivityMonitor(initially_connected=False)
        probe = ReachabilityProbe(monitor, "https://example.org", timeout=3)

        assert probe.check() is True
        assert monitor.is_connected is True
        mock_head.assert_called_once_with("https://example.org", timeout=3, allow_redirects=False)

    @patch("fxconvert.adapters.connectivity.monitor.requests.head")
    def test_transport_error_is_unreachable(self, mock_head):
        mock_head.side_effect = requests.exceptions.ConnectionError("no route")
        monitor = ConnectivityMonitor()
        listener = Mock()
        monitor.subscribe(listener)

        assert ReachabilityProbe(monitor, "https://example.org").check() is False
        listener.assert_called_once_with(False)

    @patch("fxconvert.adapters.connectivity.monitor.requests.head")
    def test_start_and_stop(self, mock_head):
        mock_head.return_value = Mock(status_code=200)
        probe = ReachabilityProbe(ConnectivityMonitor(), "https://example.org",
                                  interval_seconds=60, timeout=1)

        probe.start()
        probe.stop()

        assert probe._thread is None
        assert mock_head.call_count >= 1
