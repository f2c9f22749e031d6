# src/fxconvert/adapters/connectivity/__init__.py
"""
Connectivity Adapters - Network Reachability

This package republishes network reachability as a boolean signal.
"""

from fxconvert.adapters.connectivity.monitor import ConnectivityMonitor, ReachabilityProbe

__all__ = ["ConnectivityMonitor", "ReachabilityProbe"]
