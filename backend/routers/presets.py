"""Camera preset API routes."""

from fastapi import APIRouter, HTTPException

from perspecta.core.sensor.presets import CAMERA_PRESETS

router = APIRouter(prefix="/presets", tags=["presets"])


@router.get("")
async def list_presets() -> dict[str, dict[str, float]]:
    """List sensor presets."""
    return {
        preset_id: {"sensor_width": width, "sensor_height": height}
        for preset_id, (width, height) in CAMERA_PRESETS.items()
    }


@router.get("/{preset_id}")
async def get_preset(preset_id: str) -> dict[str, float]:
    """Get one sensor preset."""
    if preset_id not in CAMERA_PRESETS:
        raise HTTPException(status_code=404, detail="Preset not found")

    width, height = CAMERA_PRESETS[preset_id]
    return {"sensor_width": width, "sensor_height": height}
