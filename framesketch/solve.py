# framesketch/solve.py
"""
SOLVER ENTRY POINT
==================

    solve_fem(model)      → FemSuccess | FemFailure   (never raises)
    run_analysis(model)   → AnalysisReport(validation, result)

Pipeline for one call:

    validate → DOF map → assemble K and F → supports (penalty)
             → linear solve → element forces, reactions, displacements

Everything built here is scratch data for this call only: the function
is pure, so independent models can be solved concurrently without locks.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .assembly import assemble_stiffness, member_geometries
from .config import CONFIG, SolverConfig
from .kernel.dof import build_dof_map
from .kernel.solve import SingularSystemError, UnstableSystemError, solve_linear
from .loads import assemble_load_vector, group_dist_loads
from .model import DEFAULT_SECTION, FemInput, SectionProps
from .post import compute_element_results, nodal_displacements, support_reactions
from .results import FemFailure, FemResult, FemSuccess
from .supports import apply_supports
from .validate import ValidationIssue, ValidationResult, validate_model

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Validation outcome plus solver result, as the editor displays them."""
    validation: ValidationResult
    result: FemResult

    def to_dict(self):
        return {"validation": self.validation.to_dict(), "result": self.result.to_dict()}


def solve_fem(
    model: FemInput,
    section: SectionProps = DEFAULT_SECTION,
    config: SolverConfig = CONFIG,
) -> FemResult:
    """
    Analyse a model snapshot.

    Parameters:
    -----------
    model : FemInput
        Model snapshot (not modified)
    section : SectionProps
        Section stiffness used for every member
    config : SolverConfig
        Penalty, sanity limits, sample count and tolerances

    Returns:
    --------
    FemSuccess
        elements, reactions and displacements
    FemFailure
        reason "validation", "singular" or "unstable" with a message
    """
    validation = _validate(model, config)
    if validation is None:
        return _unexpected_failure()
    return _solve_validated(model, validation, section, config)


def run_analysis(
    model: FemInput,
    section: SectionProps = DEFAULT_SECTION,
    config: SolverConfig = CONFIG,
) -> AnalysisReport:
    """Validate and solve in one go, keeping the validation for display."""
    validation = _validate(model, config)
    if validation is None:
        validation = ValidationResult(ok=False, issues=(ValidationIssue(
            "error", "validation_failed", "The model could not be validated.",
        ),))
        return AnalysisReport(validation, _unexpected_failure())
    return AnalysisReport(validation, _solve_validated(model, validation, section, config))


def _validate(model: FemInput, config: SolverConfig) -> Optional[ValidationResult]:
    try:
        return validate_model(model, config)
    except Exception:
        logger.exception("Unexpected error during validation")
        return None


def _unexpected_failure() -> FemFailure:
    return FemFailure(
        reason="singular",
        message="An unexpected error occurred during the analysis.",
    )


def _solve_validated(
    model: FemInput,
    validation: ValidationResult,
    section: SectionProps,
    config: SolverConfig,
) -> FemResult:
    if not validation.ok:
        logger.info("Analysis refused: %d validation error(s)", len(validation.errors))
        return FemFailure(reason="validation", message=validation.error_message())

    for issue in validation.warnings:
        logger.warning("Validation warning [%s]: %s", issue.code, issue.message)

    try:
        return _analyse(model, section, config)
    except SingularSystemError as e:
        logger.info("Analysis failed (singular): %s", e)
        return FemFailure(
            reason="singular",
            message="The stiffness matrix is singular. The structure may be unstable.",
        )
    except UnstableSystemError as e:
        logger.info("Analysis failed (unstable): %s", e)
        return FemFailure(
            reason="unstable",
            message="The structure is unstable. Check the support conditions.",
        )
    except Exception:
        logger.exception("Unexpected error during analysis")
        return _unexpected_failure()


def _analyse(model: FemInput, section: SectionProps, config: SolverConfig) -> FemSuccess:
    dof_map = build_dof_map(model.nodes, model.members, model.joints)
    geometry = member_geometries(model, config)

    K = assemble_stiffness(model, dof_map, geometry, section)
    F = assemble_load_vector(model, dof_map, geometry)
    K_bc = apply_supports(K, model.supports, dof_map, config.penalty)

    u = solve_linear(K_bc, F, config.displacement_limit)

    elements = compute_element_results(
        model, geometry, u, dof_map, section,
        group_dist_loads(model.dist_loads), config.n_samples,
    )
    reactions = support_reactions(model, K, F, u, dof_map)
    displacements = nodal_displacements(model, u, dof_map)

    logger.info(
        "Analysis complete: %d members, %d unknowns, %d reactions",
        len(elements), dof_map.ndof, len(reactions),
    )
    return FemSuccess(
        elements=tuple(elements),
        reactions=tuple(reactions),
        displacements=tuple(displacements),
    )
