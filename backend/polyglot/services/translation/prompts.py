from polyglot.config.constants import AUTO_DETECT_LABEL, AUTO_DETECT_LANGUAGE

TRANSLATION_PROMPT = """Translate the following text from {source_label} to {target_lang}.
Provide ONLY the translated text without any explanations, notes, or prefixes.
Maintain the original tone, formatting, and cultural nuances.

Text to translate:
"{text}\""""


def source_label(source_lang: str) -> str:
    return AUTO_DETECT_LABEL if source_lang == AUTO_DETECT_LANGUAGE else source_lang


def build_translation_prompt(text: str, source_lang: str, target_lang: str) -> str:
    # str.format does not re-scan substituted values, so braces in text are safe
    return TRANSLATION_PROMPT.format(
        source_label=source_label(source_lang),
        target_lang=target_lang,
        text=text,
    )
