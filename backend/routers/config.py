"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    workspace: dict | None = None
    extensionHost: dict | None = None
    diff: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    workspace: dict
    extensionHost: dict
    diff: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()

    return ConfigResponse(
        workspace=config.get("workspace", {}),
        extensionHost=config.get("extensionHost", {}),
        diff=config.get("diff", {}),
    )


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    # Update only provided sections, merging keys within each
    for section, values in request.model_dump(exclude_none=True).items():
        current_config[section] = {**current_config.get(section, {}), **values}

    context_lines = current_config.get("diff", {}).get("contextLines", 4)
    if not isinstance(context_lines, int) or context_lines < 0:
        raise HTTPException(status_code=422, detail="diff.contextLines must be a non-negative integer")

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "message": "Configuration updated"}
