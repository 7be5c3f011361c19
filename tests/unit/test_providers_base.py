# tests/unit/test_providers_base.py
import pytest
from ai_pr_reviewer.platforms.base import SourceControlHost
from ai_pr_reviewer.providers.base import LLMProvider


@pytest.mark.unit
def test_provider_is_abstract():
    with pytest.raises(TypeError):
        LLMProvider()


@pytest.mark.unit
def test_host_is_abstract():
    with pytest.raises(TypeError):
        SourceControlHost()
