from nurture_chat.prompts import PROMPT_TEMPLATE, build_prompt


def test_prompt_embeds_user_text_verbatim():
    question = "¿Puedo comer queso fresco?"
    prompt = build_prompt(question)
    assert question in prompt
    assert prompt.startswith("Eres una asistente virtual especializada en embarazo y cuidado del bebé")
    assert "basada en evidencia médica actual" in prompt
    assert "optimiza el uso de tokens" in prompt
    assert prompt.endswith("Solo recomienda ver al doctor en casa de algo grave y urgente")


def test_prompt_does_not_interpret_braces_in_input():
    prompt = build_prompt("{user_input} {0}")
    assert "{user_input} {0}" in prompt


def test_template_has_single_placeholder():
    assert PROMPT_TEMPLATE.count("{") == 1
    assert PROMPT_TEMPLATE.count("{user_input}") == 1
