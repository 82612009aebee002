"""
Router for unit conversion.
"""

from fastapi import APIRouter

from ..schemas import UnitConvertRequest, UnitConvertResponse
from ..services.unit_conversion import auto_select_unit, convert_unit
from ..settings import settings

router = APIRouter()


def _target_unit(req: UnitConvertRequest) -> str:
    """Explicit unit, else the most readable unit of the requested (or default) system."""
    if req.to_unit:
        return req.to_unit
    system = req.target_system or settings.default_unit_system
    return auto_select_unit(req.qty, req.from_unit, system)


@router.post("/convert", response_model=UnitConvertResponse)
def convert_units(req: UnitConvertRequest):
    result = convert_unit(
        qty=req.qty,
        from_unit=req.from_unit,
        to_unit=_target_unit(req),
        ingredient_name=req.ingredient_name or "",
        allow_cross_type=bool(req.force_cross_type),
        override_density=req.density_g_per_ml,
    )
    return UnitConvertResponse(**result.model_dump())
