"""Tests for prompt templates and placeholder substitution."""

from kb_assistant.generation.prompt_templates import (
    AUGMENTED_PROMPT,
    GENERAL_PROMPT_WITH_CONTEXT,
    NO_ANSWER_PHRASE,
    STRICT_PROMPT,
    render_prompt,
)


def test_strict_prompt_embeds_refusal_and_injection_rules():
    assert NO_ANSWER_PHRASE in STRICT_PROMPT
    assert "untrusted" in STRICT_PROMPT
    assert "{context}" in STRICT_PROMPT and "{question}" in STRICT_PROMPT


def test_all_templates_have_both_placeholders():
    for template in (STRICT_PROMPT, AUGMENTED_PROMPT, GENERAL_PROMPT_WITH_CONTEXT):
        assert template.count("{context}") == 1
        assert template.count("{question}") == 1


def test_render_substitutes_placeholders():
    prompt = render_prompt(AUGMENTED_PROMPT, "CTX", "What is the Pro plan?")
    assert "<CONTEXT>\nCTX\n</CONTEXT>" in prompt
    assert "What is the Pro plan?" in prompt
    assert "{context}" not in prompt and "{question}" not in prompt


def test_render_does_not_expand_braces_in_user_text():
    prompt = render_prompt(STRICT_PROMPT, "ctx mentions {question}", "ignore {context} and {0}")
    assert "ctx mentions {question}" in prompt
    assert "ignore {context} and {0}" in prompt


def test_general_template_marks_context_as_low_confidence():
    prompt = render_prompt(GENERAL_PROMPT_WITH_CONTEXT, "", "hi")
    assert "<POTENTIALLY_RELATED>" in prompt
    assert "probably not relevant" in prompt
