"""Plain-text excerpts for list summaries."""

import html
import re

_BLOCK_BREAK = re.compile(r"</p>|<br\s*/?>|</h[1-6]>|</li>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_SENTENCE_END = re.compile(r"[.!?。！？](?=\s|$)")


def strip_html(text: str) -> str:
    """移除 HTML 标签并合并空白。"""
    text = _BLOCK_BREAK.sub(" ", text)
    text = _TAG.sub("", text)
    text = html.unescape(text)
    return " ".join(text.split())


def trim_summary(text: str, size: int = 200) -> str:
    """Trim text to at most ``size`` characters.

    截断优先级：句子结尾 > 单词边界 > 硬截断。
    句子结尾只在截断点落在后半段时采用，避免摘要过短。
    """
    text = strip_html(text)
    if size <= 0:
        return ""
    if len(text) <= size:
        return text

    window = text[:size]
    sentence_ends = [m.end() for m in _SENTENCE_END.finditer(window)]
    if sentence_ends and sentence_ends[-1] >= size // 2:
        return window[: sentence_ends[-1]]

    # 下一个字符是空白说明 window 恰好在单词边界结束
    if text[size].isspace():
        return window.rstrip()
    cut = window.rfind(" ")
    if cut > 0:
        return window[:cut].rstrip()
    return window
