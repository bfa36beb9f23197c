from __future__ import annotations

"""
Compaction Workflow Orchestrator.

Drives the full cycle around the pure engine: snapshot the records of a
provider, rebuild the forest, compact it, plan the file moves against the
same snapshot, hand the moves to an applier and rebuild from a fresh
snapshot. Failures are reported through WorkflowResult rather than raised.
"""

import logging
from typing import Any, Dict, List, Optional

from zettelforest.core.forest.builder import build_forest
from zettelforest.core.forest.compaction import compact_forest
from zettelforest.core.services.rename_planner import plan_renames
from zettelforest.domain.constants import DEFAULT_TEMP_SUFFIX, DUPLICATE_POLICY_LAST
from zettelforest.domain.errors import RenameApplyError, RenameConflictError
from zettelforest.domain.forest_models import Forest
from zettelforest.domain.interfaces import RecordProvider, RenameApplier
from zettelforest.domain.rename_models import (
    RenameStep,
    WorkflowResult,
    create_error_result,
    create_success_result,
)
from zettelforest.infra.fs import FileSystemRenameApplier, FolderRecordProvider
from zettelforest.infra.logging import LoggingConfig, configure_logging
from zettelforest.validate_config import validate_config

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_forest(provider: RecordProvider, duplicate_policy: str = DUPLICATE_POLICY_LAST) -> Forest:
    """Snapshot the provider and build its forest."""
    return build_forest(provider.snapshot(), duplicate_policy=duplicate_policy)


def compact_and_apply(
        provider: RecordProvider,
        applier: Optional[RenameApplier] = None,
        *,
        dry_run: bool = False,
        temp_suffix: str = DEFAULT_TEMP_SUFFIX,
        duplicate_policy: str = DUPLICATE_POLICY_LAST,
) -> WorkflowResult:
    """
    Compact the provider's forest and apply the resulting file moves.

    Args:
        provider: Source of record snapshots.
        applier: Performs the moves; may be None only for dry runs.
        dry_run: Compute compaction and plan without touching storage.
        temp_suffix: Suffix for temporary paths used to break rename cycles.
        duplicate_policy: Duplicate identifier resolution for the builder.

    Returns:
        WorkflowResult: Compaction, plan, applied steps and resulting forest.
    """
    # 1. Snapshot and compaction
    records = provider.snapshot()
    forest = build_forest(records, duplicate_policy=duplicate_policy)
    compaction = compact_forest(forest)

    # 2. Pre-flight planning against the same storage state
    plan = plan_renames(compaction.path_renames, provider.existing_paths(), temp_suffix)
    if not plan.ok:
        error = RenameConflictError(plan.conflicts)
        logger.warning(f"Compaction aborted: {error}")
        return create_error_result(
            str(error), compaction=compaction, plan=plan, forest=forest, dry_run=dry_run
        )

    if dry_run or not plan.steps:
        logger.info(f"Compaction planned {len(plan.steps)} move(s); storage untouched")
        return create_success_result(compaction, plan, (), forest, dry_run=dry_run)

    if applier is None:
        return create_error_result(
            "No rename applier supplied for a non dry-run compaction.",
            compaction=compaction, plan=plan, forest=forest,
        )

    # 3. Apply and reload
    applied: List[RenameStep] = []
    try:
        for step in plan.steps:
            applier.apply(step)
            applied.append(step)
    except RenameApplyError as e:
        logger.error(f"Compaction stopped after {len(applied)} move(s): {e}")
        return create_error_result(
            str(e), compaction=compaction, plan=plan, applied=tuple(applied),
            forest=load_forest(provider, duplicate_policy),
        )

    reloaded = load_forest(provider, duplicate_policy)
    logger.info(f"Compaction applied {len(applied)} move(s)")
    return create_success_result(compaction, plan, tuple(applied), reloaded)


def compact_folder(config: Dict[str, Any], *, setup_logging: bool = False) -> WorkflowResult:
    """
    Run compact_and_apply over a local notes folder described by a config dict.

    The config is validated first; its notes_folder, extensions, recursive,
    dry_run, temp_suffix and duplicate_policy keys drive the run.

    Args:
        config: Raw settings, as returned by load_config.
        setup_logging: Also configure the logging subsystem from the
                       log_level and log_file keys. Off by default so that
                       embedding applications keep control of their handlers.
    """
    cfg, warnings = validate_config(config)
    if setup_logging:
        configure_logging(LoggingConfig.from_settings(cfg), force=True)

    for w in warnings:
        logger.warning(f"Config: {w}")

    folder = cfg["notes_folder"]
    provider = FolderRecordProvider(folder, extensions=cfg["extensions"], recursive=cfg["recursive"])
    applier = None if cfg["dry_run"] else FileSystemRenameApplier(folder)

    logger.info(f"Compacting notes in {folder}{' (dry run)' if cfg['dry_run'] else ''}")
    return compact_and_apply(
        provider,
        applier,
        dry_run=cfg["dry_run"],
        temp_suffix=cfg["temp_suffix"],
        duplicate_policy=cfg["duplicate_policy"],
    )
