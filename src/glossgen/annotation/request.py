"""Build the structured request sent to the annotation provider."""

from __future__ import annotations

import json
from typing import Any

from glossgen.content.models import ManifestItem, ParsedContent

SYSTEM_PROMPT = "\n".join(
    [
        "你是严谨的文言注释助手，请对提供的每一行文言文生成逐字及重点词组释义。",
        "要求：",
        "1. 仅使用给定的 charList 中的字符与索引，禁止新增或改写原文；",
        "2. 若能判断词组释义，请在 phrases 中记录起止索引，并给出简明释义；",
        "3. 对缺乏明确释义的字词可留空；",
        "4. 不要输出整段白话文翻译；",
        '5. 严格只返回 JSON，格式：{"title":"注释标题(可选)","summary":"可选概述",'
        '"lines":[{"index":行号,"chars":[{"i":索引,"p":"拼音(可选)","g":"释义(可选)"}],'
        '"phrases":[{"s":起,"e":止,"p":"拼音(可选)","g":"释义(可选)"}]}]}',
    ]
)


def build_annotation_request(item: ManifestItem, content: ParsedContent) -> dict[str, Any]:
    """Describe every original line with zero-based line and character indices."""

    return {
        "title": item.title or item.file,
        "lines": [
            {
                "index": index,
                "text": text,
                "charList": [{"i": position, "ch": char} for position, char in enumerate(text)],
            }
            for index, text in enumerate(content.original_lines)
        ],
    }


def build_messages(request: dict[str, Any]) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": json.dumps(request, ensure_ascii=False)},
    ]
