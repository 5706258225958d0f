"""Shared pytest fixtures for ideinfo tests."""

from __future__ import annotations

import pytest

from ideinfo.host import InMemoryHost
from ideinfo.providers import HostRoots


@pytest.fixture
def host_roots() -> HostRoots:
    """Return host roots rooted at a fixed execution root.

    Returns
    -------
    HostRoots
        Roots shared by the in-memory host.
    """
    return HostRoots(workspace_root="/workspace", execution_root="/exec")


@pytest.fixture
def memory_host(host_roots: HostRoots) -> InMemoryHost:
    """Return an empty in-memory host.

    Returns
    -------
    InMemoryHost
        Host collecting outputs in memory.
    """
    return InMemoryHost(host_roots)
