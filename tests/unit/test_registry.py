"""Tests for the source adapter registry."""

from unittest.mock import patch

import pytest

from jobhunt.core.config import HttpConfig, Settings
from jobhunt.core.schemas import SourceTag
from jobhunt.http.session import HttpSession
from jobhunt.sources import registry
from jobhunt.sources.base import SourceAdapter


class TestBuildAdapters:
    def test_one_adapter_per_tag_in_order(self) -> None:
        adapters = registry.build_adapters(HttpSession(HttpConfig()), Settings())
        assert list(adapters) == list(SourceTag)
        for tag, adapter in adapters.items():
            assert isinstance(adapter, SourceAdapter)
            assert adapter.source_tag is tag

    def test_missing_adapter_raises(self) -> None:
        partial = dict(registry.ADAPTER_CLASSES)
        partial.pop(SourceTag.CATHO)
        with patch.object(registry, "ADAPTER_CLASSES", partial), \
                pytest.raises(RuntimeError, match="CATHO"):
            registry.build_adapters(HttpSession(HttpConfig()), Settings())

    def test_keyless_sources_configured(self) -> None:
        adapters = registry.build_adapters(HttpSession(HttpConfig()), Settings())
        with patch.dict("os.environ", {}, clear=True):
            assert adapters[SourceTag.REMOTIVE].is_configured() is True
            assert adapters[SourceTag.LINKEDIN].is_configured() is True
            assert adapters[SourceTag.JSEARCH].is_configured() is False
            assert adapters[SourceTag.JOOBLE].is_configured() is False
            assert adapters[SourceTag.OPENAI_WEB].is_configured() is False
