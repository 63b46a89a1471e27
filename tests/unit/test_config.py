"""Tests for settings and prompt templates."""

import pytest
from pydantic import ValidationError

from restaurant_qa.config.constants import PromptName
from restaurant_qa.config.prompts import PromptLibrary, render_prompt
from restaurant_qa.config.settings import Settings
from restaurant_qa.exceptions import PromptNotFoundError

# ==========================================
#  Settings
# ==========================================


def test_settings_defaults(settings):
    assert settings.port == 3002
    assert settings.vector_threshold == 0.9
    assert settings.vector_node_label == "Chunk"
    assert settings.prompts_dir.is_dir()


def test_log_level_is_normalized():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_threshold_outside_unit_interval_rejected(threshold):
    with pytest.raises(ValidationError):
        Settings(vector_threshold=threshold)


def test_non_positive_timeout_rejected():
    with pytest.raises(ValidationError):
        Settings(llm_timeout=0)


# ==========================================
#  Prompts
# ==========================================


def test_render_only_replaces_supplied_variables():
    template = "Q: {question}\nExample: {dishName}"
    assert render_prompt(template, {"question": "hi"}) == "Q: hi\nExample: {dishName}"


@pytest.mark.parametrize("name", list(PromptName))
def test_shipped_prompts_load(prompts, name):
    assert prompts.get(name).strip()


@pytest.mark.parametrize(
    "name, placeholders",
    [
        (PromptName.NLP_TO_CYPHER, ("{schema}", "{context}", "{question}")),
        (PromptName.CHART_QUERY_GENERATOR, ("{schema}", "{context}", "{question}")),
        (PromptName.RESPONSE_TEMPLATE_FROM_JSON, ("{question}", "{structuredResponse}")),
    ],
)
def test_prompt_placeholders(prompts, name, placeholders):
    text = prompts.get(name)
    for placeholder in placeholders:
        assert placeholder in text


def test_prompt_lookup_by_string(prompts):
    assert prompts.get("context") == prompts.get(PromptName.CONTEXT)


def test_unknown_prompt_name(prompts):
    with pytest.raises(PromptNotFoundError):
        prompts.get("sqlGenerator")


def test_missing_prompt_file(tmp_path):
    with pytest.raises(PromptNotFoundError):
        PromptLibrary(tmp_path).get(PromptName.CONTEXT)
