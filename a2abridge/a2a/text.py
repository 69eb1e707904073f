"""Render A2A messages and tasks as plain text for the host."""

from __future__ import annotations

import orjson

from a2abridge.a2a.models import A2AMessage, A2ATask


def extract_message_text(message: A2AMessage | None) -> str:
    """Prefer text parts, then data parts, then file parts."""
    if message is None:
        return ""

    texts = [p.text for p in message.parts if p.kind == "text" and p.text]
    if texts:
        return " ".join(texts)

    data = [p.data for p in message.parts if p.kind == "data" and p.data is not None]
    if data:
        return "\n".join(f"Data: {orjson.dumps(d).decode()}" for d in data)

    files = [p.file for p in message.parts if p.kind == "file" and p.file is not None]
    if files:
        return "\n".join(_describe_file(f) for f in files)

    return "[unknown message part]" if message.parts else ""


def _describe_file(file: dict) -> str:
    if file.get("name"):
        return f"File: {file['name']}"
    if file.get("uri"):
        return f"File: {file['uri']}"
    if "bytes" in file:
        return "File: [unnamed file with bytes]"
    return "[unknown file part]"


def extract_task_text(task: A2ATask) -> str:
    lines = [
        f"ID:      {task.id}",
        f"State:   {task.status.state.value}",
    ]
    message_text = extract_message_text(task.status.message)
    if message_text:
        lines.append(f"Message: {message_text}")
    for artifact in task.artifacts:
        artifact_text = extract_message_text(A2AMessage(parts=artifact.parts))
        if artifact_text:
            label = artifact.name or artifact.artifact_id
            lines.append(f"Artifact ({label}): {artifact_text}")
    if task.history:
        lines.append(f"History: {len(task.history)} messages")
    return "\n".join(lines)
