"""
Extension Host Client - Executes action edit commands on the extension host
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from models.edit import Diagnostic, EditCommand

from .errors import CommandExecutionError

logger = logging.getLogger(__name__)


class ExtensionHostClient:
    """HTTP client for the extension host's command execution endpoint"""

    def __init__(self, config: dict[str, Any]):
        cfg = config.get("extensionHost", {})
        self.endpoint = cfg.get("endpoint", "http://localhost:3000").rstrip("/")
        self.timeout_seconds = cfg.get("timeoutSeconds", 30)

    async def execute_action_edit_command(
        self,
        diagnostic: Diagnostic | None,
        command: EditCommand,
    ) -> dict[str, Any] | None:
        """Execute an edit command and return its serialized workspace edit, if any"""
        url = f"{self.endpoint}/commands/executeActionEdit"
        payload = {
            "diagnostic": diagnostic.model_dump(mode="json") if diagnostic else None,
            "command": command.model_dump(mode="json"),
        }

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error("Command %s failed (%d): %s", command.command, response.status, error_text)
                    raise CommandExecutionError(
                        f"Command {command.command} failed ({response.status}): {error_text}"
                    )
                data = await response.json()

        if not isinstance(data, dict):
            raise CommandExecutionError(
                f"Command {command.command} returned a malformed response: {data!r}"
            )
        return data.get("edit")
