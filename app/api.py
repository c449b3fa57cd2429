"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import (
    ConditionConfiguration,
    ConditionPluginInfo,
    ConfigurationErrorDetail,
    EvaluationRequest,
    EvaluationResponse,
)
from models.records import WeightConditionConfig
from services.conditions import ConditionPlugin, get_condition_plugin, list_condition_plugins
from services.errors import ConditionConfigurationError, UnknownOperator
from settings import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_plugin(plugin_id: str) -> ConditionPlugin:
    try:
        return get_condition_plugin(plugin_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc.args[0]),
        ) from exc


def _describe(plugin: ConditionPlugin, include_defaults: bool = False) -> ConditionPluginInfo:
    defaults = None
    if include_defaults:
        defaults = ConditionConfiguration.from_config(plugin.default_configuration())
    return ConditionPluginInfo(
        plugin_id=plugin.plugin_id,
        label=plugin.label,
        category=plugin.category,
        entity_type=plugin.entity_type,
        operators=plugin.comparison_operators(),
        default_configuration=defaults,
    )


def _to_config(payload: ConditionConfiguration, settings: Settings) -> WeightConditionConfig:
    unit = settings.default_weight_unit
    return WeightConditionConfig(
        operator=payload.operator,
        weight=payload.weight.to_weight(unit) if payload.weight else None,
        max_weight=payload.max_weight.to_weight(unit) if payload.max_weight else None,
    )


@router.get(
    "/conditions",
    response_model=List[ConditionPluginInfo],
    summary="List registered condition plugins.",
)
async def list_conditions() -> List[ConditionPluginInfo]:
    return [_describe(plugin) for plugin in list_condition_plugins()]


@router.get(
    "/conditions/{plugin_id}",
    response_model=ConditionPluginInfo,
    summary="Describe a condition plugin and its default configuration.",
)
async def get_condition(plugin: ConditionPlugin = Depends(get_plugin)) -> ConditionPluginInfo:
    return _describe(plugin, include_defaults=True)


@router.post(
    "/conditions/{plugin_id}/configure",
    response_model=ConditionConfiguration,
    summary="Validate and normalise a condition configuration.",
)
async def configure_condition(
    payload: ConditionConfiguration,
    plugin: ConditionPlugin = Depends(get_plugin),
    settings: Settings = Depends(get_settings),
) -> ConditionConfiguration:
    submitted = _to_config(payload, settings)
    try:
        config = plugin.configure(submitted.operator, submitted.weight, submitted.max_weight)
    except ConditionConfigurationError as exc:
        logger.info(
            "Rejected condition configuration",
            extra={
                "plugin_id": plugin.plugin_id,
                "operator": payload.operator,
                "field": exc.field,
                "reason": exc.message,
            },
        )
        detail = ConfigurationErrorDetail(field=exc.field, error=exc.kind, message=exc.message)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail.model_dump(),
        ) from exc
    except UnknownOperator as exc:
        detail = ConfigurationErrorDetail(
            field="operator", error=type(exc).__name__, message=str(exc)
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail.model_dump(),
        ) from exc
    return ConditionConfiguration.from_config(config)


@router.post(
    "/conditions/{plugin_id}/evaluate",
    response_model=EvaluationResponse,
    summary="Evaluate a configured condition against a shipment weight.",
)
async def evaluate_condition(
    payload: EvaluationRequest,
    plugin: ConditionPlugin = Depends(get_plugin),
    settings: Settings = Depends(get_settings),
) -> EvaluationResponse:
    config = _to_config(payload.configuration, settings)
    subject = payload.weight.to_weight(settings.default_weight_unit) if payload.weight else None
    try:
        result = plugin.evaluate(config, subject)
    except (ConditionConfigurationError, UnknownOperator) as exc:
        logger.error(
            "Condition configuration failed integrity check during evaluation",
            extra={
                "plugin_id": plugin.plugin_id,
                "operator": payload.configuration.operator,
                "reason": str(exc),
            },
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Condition configuration is invalid.",
        ) from exc
    except ValueError as exc:
        logger.info(
            "Rejected shipment weight",
            extra={"plugin_id": plugin.plugin_id, "field": "weight", "reason": str(exc)},
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc
    return EvaluationResponse(result=result)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
