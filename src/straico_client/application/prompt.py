"""Render an OpenAI chat conversation as a single Straico prompt.

Straico's completion endpoint takes one ``message`` string, so the proxy
flattens the conversation into role-tagged blocks.  When tools are offered, a
preamble describes them and asks the model to reply with ``<tool_call>``
markup, which :mod:`straico_client.domain.tool_calls` turns back into
structured calls.  Earlier assistant tool calls are rendered in that same
markup so multi-turn tool conversations stay consistent.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from straico_client.domain.tool_calls import TOOL_CALL_CLOSE, TOOL_CALL_OPEN

_ROLES = ("system", "user", "assistant", "tool")

TOOLS_PREAMBLE = (
    "You can call the following tools. Each is described by a JSON schema:\n"
    "<tools>\n{tools}\n</tools>\n"
    "To call a tool, reply with one block per call and no other text:\n"
    + TOOL_CALL_OPEN
    + '{{"name": "<tool name>", "arguments": {{<arguments as a JSON object>}}}}'
    + TOOL_CALL_CLOSE
    + "\nIf no tool is needed, answer normally."
)


def build_prompt(messages: List[Dict[str, Any]], tools: Optional[List[Dict[str, Any]]] = None) -> str:
    """Return the prompt text for *messages* (OpenAI format) and optional *tools*.

    Raises:
        ValueError: a message has no role, or a role other than system/user/assistant/tool.
    """
    blocks: List[str] = []
    if tools:
        blocks.append(render_tools(tools))
    for message in messages:
        blocks.append(render_message(message))
    return "\n\n".join(blocks)


def render_tools(tools: List[Dict[str, Any]]) -> str:
    # OpenAI wraps each definition as {"type": "function", "function": {...}}
    definitions = [tool.get("function", tool) for tool in tools]
    return TOOLS_PREAMBLE.format(tools=json.dumps(definitions, indent=2, ensure_ascii=False))


def render_message(message: Dict[str, Any]) -> str:
    role = message.get("role")
    if role not in _ROLES:
        raise ValueError(f"Unsupported message role {role!r}; expected one of {', '.join(_ROLES)}")

    body = _content_text(message.get("content"))
    if role == "assistant" and message.get("tool_calls"):
        calls = [_render_tool_call(call) for call in message["tool_calls"]]
        body = "\n".join(part for part in [body, *calls] if part)
    if role == "tool" and message.get("tool_call_id"):
        return f'<tool id="{message["tool_call_id"]}">\n{body}\n</tool>'
    return f"<{role}>\n{body}\n</{role}>"


def _render_tool_call(call: Dict[str, Any]) -> str:
    function = call.get("function") or {}
    arguments = function.get("arguments")
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError:
            pass
    payload = {"name": function.get("name", ""), "arguments": arguments if arguments is not None else {}}
    return TOOL_CALL_OPEN + json.dumps(payload, ensure_ascii=False) + TOOL_CALL_CLOSE


def _content_text(content: Any) -> str:
    """Flatten OpenAI content (string or list of parts) to text; non-text parts are dropped."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = [
            part.get("text", "")
            for part in content
            if isinstance(part, dict) and part.get("type") == "text"
        ]
        return "\n".join(texts)
    return str(content)
