"""Shared fixtures for tagtemplate tests."""

from __future__ import annotations

import pytest

from tagtemplate.compiler import compile_generated, compile_interpreted

COMPILERS = {
    "generated": compile_generated,
    "interpreted": compile_interpreted,
}


@pytest.fixture(params=sorted(COMPILERS))
def compile_fn(request):
    """Each compiler strategy in turn."""
    return COMPILERS[request.param]


@pytest.fixture
def compilers():
    """Both compiler strategies, for comparing their output."""
    return tuple(COMPILERS[name] for name in sorted(COMPILERS))
