"""Unit test fixtures — a ModerationService wired over memory backends."""

from __future__ import annotations

import pytest

from contentmod.moderation.service import build_service
from tests.fakes import MemoryEntityHost, MemoryStateBackend, MemoryWorkflowRepository, editorial_workflow


@pytest.fixture
def workflow():
    return editorial_workflow()


@pytest.fixture
def workflows(workflow):
    return MemoryWorkflowRepository([workflow])


@pytest.fixture
def backend():
    return MemoryStateBackend()


@pytest.fixture
def host():
    return MemoryEntityHost()


@pytest.fixture
def service(workflows, backend, host):
    return build_service(workflows, backend, host)
