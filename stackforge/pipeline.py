"""Stackforge generation pipeline.

Drives one project scaffold through the stages of :mod:`stackforge.state`:

RESOLVING            -- Resolve the stack id and reference snapshot, create the project directory.
STRUCTURE_GENERATED  -- Ask for the file list; an unusable reply ends the run.
CONTENT_GENERATED    -- Generate and write every file, one at a time.
VALIDATING           -- Rule-based validation and/or the reference diff.
CORRECTING           -- Targeted repair, then back to VALIDATING.

Usage::

    python -m stackforge.pipeline --project-name shop --project-type frontend \\
        --frontend Vue --frontend-framework "Vue + Vite" --css-framework None
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field
from rich.markup import escape
from rich.panel import Panel

from stackforge.config import Config, MismatchPolicy
from stackforge.corrector import AutoCorrector
from stackforge.generation import (
    ContentGenerator,
    FileFailure,
    StructureGenerationError,
    StructureGenerator,
    ensure_project_directory,
    remove_project_directory,
)
from stackforge.llm_client import OllamaClient, TextGenerator, create_client
from stackforge.models import Preferences
from stackforge.prompts import PromptBuilder
from stackforge.stack import StackResolution, resolve_stack
from stackforge.state import LoopState, Outcome, Stage, transition
from stackforge.utils import (
    console,
    format_duration,
    print_error,
    print_stage_header,
    print_success,
    print_summary_table,
    print_warning,
    save_json,
)
from stackforge.validator import (
    REPORT_DIR,
    CorrectionBatch,
    DiffResult,
    ValidationResult,
    build_fix_summary,
    diff_against_reference,
    validate,
    validate_file_list,
)

logger = logging.getLogger(__name__)

REPORT_FILE = "generation-report.json"

STAGE_TITLES: dict[Stage, str] = {
    Stage.RESOLVING: "Resolving stack",
    Stage.STRUCTURE_GENERATED: "Designing file structure",
    Stage.CONTENT_GENERATED: "Generating file contents",
    Stage.VALIDATING: "Validating project",
    Stage.CORRECTING: "Correcting project",
}

# ---------------------------------------------------------------------------
# Exceptions and results
# ---------------------------------------------------------------------------


class PipelineError(Exception):
    """Raised when a stage fails irrecoverably."""

    def __init__(self, stage: Stage, message: str) -> None:
        self.stage = stage
        super().__init__(f"{STAGE_TITLES.get(stage, stage.value)}: {message}")


class PipelineOutcome(BaseModel):
    """Summary of one generation run."""

    success: bool = False
    project_path: str = ""
    stack_id: str = ""
    final_stage: Stage = Stage.RESOLVING
    files_planned: int = 0
    files_written: int = 0
    failed_files: list[FileFailure] = Field(default_factory=list)
    rejected_files: list[str] = Field(default_factory=list, description="File-list entries dropped before generation")
    attempts: int = Field(default=0, description="Validation rounds executed")
    validation: ValidationResult | None = None
    diff: DiffResult | None = None
    corrections: list[CorrectionBatch] = Field(default_factory=list)
    fix_summary: str | None = None
    project_removed: bool = False
    error: str | None = None
    duration_seconds: float = 0.0


@dataclass
class _Run:
    """Mutable bookkeeping for one run."""

    preferences: Preferences
    project_path: Path
    state: LoopState
    resolution: StackResolution | None = None
    file_list: list[str] = field(default_factory=list)
    outcome: PipelineOutcome = field(default_factory=PipelineOutcome)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class GenerationPipeline:
    """Generation-validation-correction orchestrator.

    Attributes:
        config: Pipeline configuration.
        client: Text generator shared by every stage.
    """

    def __init__(
        self,
        config: Config,
        client: TextGenerator | None = None,
        *,
        prompt_builder: PromptBuilder | None = None,
        show_progress: bool = True,
    ) -> None:
        self.config = config
        self.client = client or create_client(config)
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.show_progress = show_progress

        llm = config.llm
        self.structure = StructureGenerator(self.client, self.prompt_builder, timeout=llm.structure_timeout)
        self.content = ContentGenerator(self.client, self.prompt_builder, timeout=llm.content_timeout)
        self.corrector = AutoCorrector(self.client, self.prompt_builder.renderer, timeout=llm.correction_timeout)

        self._handlers: dict[Stage, Callable[[_Run], Awaitable[Outcome]]] = {
            Stage.RESOLVING: self._resolve,
            Stage.STRUCTURE_GENERATED: self._generate_structure,
            Stage.CONTENT_GENERATED: self._generate_content,
            Stage.VALIDATING: self._validate,
            Stage.CORRECTING: self._correct,
        }

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    async def run(self, preferences: Preferences) -> PipelineOutcome:
        """Run the pipeline to a terminal stage and return its summary."""
        started = time.monotonic()
        run = _Run(
            preferences=preferences,
            project_path=Path(preferences.project_path),
            state=LoopState(max_attempts=self.config.validation.max_attempts),
        )
        run.outcome.project_path = str(run.project_path)

        console.print(
            Panel(
                f"[bold bright_cyan]Stackforge[/bold bright_cyan]\n"
                f"Project    : {escape(preferences.project_name)}\n"
                f"Output     : {escape(str(run.project_path))}\n"
                f"Validation : {self.config.validation.mode.value}",
                title="[bold]Generation Start[/bold]",
                border_style="bright_cyan",
            )
        )
        logger.info(
            "Pipeline started",
            extra={"project": preferences.project_name, "path": str(run.project_path)},
        )

        while not run.state.stage.is_terminal:
            stage = run.state.stage
            print_stage_header(stage.value, self._stage_title(run))
            try:
                result = await self._handlers[stage](run)
            except PipelineError as exc:
                run.outcome.error = str(exc)
                print_error(str(exc))
                result = Outcome.IRRECOVERABLE
            except Exception as exc:
                logger.exception("Unexpected error", extra={"stage": stage.value})
                run.outcome.error = f"{STAGE_TITLES[stage]}: {exc}"
                print_error(f"{STAGE_TITLES[stage]} failed unexpectedly: {exc}")
                result = Outcome.IRRECOVERABLE

            next_state = transition(run.state, result)
            logger.info(
                "Stage finished",
                extra={
                    "stage": stage.value,
                    "result": result.value,
                    "next_stage": next_state.stage.value,
                    "attempt": next_state.attempt,
                },
            )
            run.state = next_state

        outcome = run.outcome
        outcome.final_stage = run.state.stage
        outcome.success = run.state.stage is Stage.DONE_SUCCESS
        outcome.duration_seconds = round(time.monotonic() - started, 3)
        if outcome.validation is not None and not outcome.success:
            outcome.fix_summary = build_fix_summary(outcome.validation, preferences)

        self._save_report(run)
        self._print_final_summary(outcome)
        return outcome

    def _stage_title(self, run: _Run) -> str:
        title = STAGE_TITLES[run.state.stage]
        if run.state.stage is Stage.VALIDATING:
            return f"{title} (attempt {run.state.attempt}/{run.state.max_attempts})"
        return title

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    async def _resolve(self, run: _Run) -> Outcome:
        validation = self.config.validation
        resolution = resolve_stack(
            run.preferences,
            validation.official_files_root,
            load_reference=validation.mode.uses_official,
        )
        run.resolution = resolution
        run.outcome.stack_id = resolution.stack_id
        if resolution.is_custom:
            print_warning("No known stack matched; continuing as a custom stack without reference files.")
        elif validation.mode.uses_official:
            console.print(
                f"  Stack [bold]{resolution.stack_id}[/bold] "
                f"({len(resolution.reference_files)} reference file(s))"
            )
        else:
            console.print(f"  Stack [bold]{resolution.stack_id}[/bold]")

        try:
            await asyncio.to_thread(ensure_project_directory, run.project_path)
        except OSError as exc:
            raise PipelineError(Stage.RESOLVING, f"Cannot create {run.project_path}: {exc}") from exc
        return Outcome.PASSED

    async def _generate_structure(self, run: _Run) -> Outcome:
        if isinstance(self.client, OllamaClient) and not await self.client.is_available():
            raise PipelineError(
                Stage.STRUCTURE_GENERATED,
                f"Ollama is not reachable at {self.client.base_url}",
            )

        try:
            file_list = await self.structure.generate(run.preferences)
        except StructureGenerationError as exc:
            raise PipelineError(Stage.STRUCTURE_GENERATED, str(exc)) from exc

        check = validate_file_list(file_list, run.preferences)
        run.outcome.rejected_files = check.errors
        for warning in check.warnings:
            print_warning(f"  {warning}")
        if not check.accepted:
            raise PipelineError(Stage.STRUCTURE_GENERATED, "No usable paths in the file list")

        run.file_list = check.accepted
        run.outcome.files_planned = len(check.accepted)
        print_success(f"  Architecture designed: {len(check.accepted)} file(s)")
        return Outcome.PASSED

    async def _generate_content(self, run: _Run) -> Outcome:
        report = await self.content.generate_all(
            run.preferences,
            run.file_list,
            run.project_path,
            show_progress=self.show_progress,
        )
        run.outcome.files_written = report.files_written
        run.outcome.failed_files = report.failures
        console.print(f"  Wrote {report.files_written}/{len(run.file_list)} file(s)")
        for failure in report.failures:
            print_warning(f"  {escape(failure.path)}: {escape(failure.error)}")
        return Outcome.PASSED

    async def _validate(self, run: _Run) -> Outcome:
        mode = self.config.validation.mode
        run.outcome.attempts = run.state.attempt
        stack_id = run.resolution.stack_id if run.resolution else "custom"

        if mode.uses_rules:
            result = await asyncio.to_thread(validate, run.project_path, stack_id, run.preferences)
            run.outcome.validation = result
            if not result.is_valid:
                print_warning(f"  {len(result.errors)} validation issue(s) found")
                for error in result.errors:
                    console.print(f"    - {escape(error)}")
                return Outcome.FAILED
            print_success(f"  Rules passed ({result.standard})")

        if mode.uses_official:
            reference = run.resolution.reference_files if run.resolution else {}
            diff = await asyncio.to_thread(diff_against_reference, run.project_path, reference)
            run.outcome.diff = diff
            if not diff.is_valid:
                self._handle_reference_mismatch(run, diff)
                return Outcome.IRRECOVERABLE
            if diff.skipped:
                print_warning("  No reference snapshot for this stack; diff skipped")
            else:
                print_success("  Project matches the reference snapshot")

        return Outcome.PASSED

    async def _correct(self, run: _Run) -> Outcome:
        validation = run.outcome.validation
        if validation is None:
            raise PipelineError(Stage.CORRECTING, "No validation result to correct")

        summary = build_fix_summary(validation, run.preferences)
        if summary:
            logger.info("Correction requested", extra={"summary": summary})

        batch = await self.corrector.correct(run.project_path, validation, run.preferences)
        run.outcome.corrections.append(batch)
        if not batch.success:
            print_error(f"  Correction aborted: {batch.error}")
            return Outcome.FAILED

        failed = batch.failed
        console.print(f"  Applied {len(batch.corrections) - len(failed)}/{len(batch.corrections)} correction(s)")
        return Outcome.PASSED

    def _handle_reference_mismatch(self, run: _Run, diff: DiffResult) -> None:
        print_error(
            f"  Reference mismatch: {len(diff.missing_files)} missing, "
            f"{len(diff.extra_files)} extra, {len(diff.mismatched_files)} different"
        )
        run.outcome.error = "Generated project does not match the reference snapshot"
        if self.config.validation.mismatch_policy is MismatchPolicy.DELETE:
            run.outcome.project_removed = remove_project_directory(run.project_path)
            if run.outcome.project_removed:
                print_warning(f"  Removed {escape(str(run.project_path))}")
        else:
            print_warning("  Partial output kept for inspection")

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _save_report(self, run: _Run) -> None:
        if run.outcome.project_removed or not run.project_path.is_dir():
            return
        report_path = run.project_path / REPORT_DIR / REPORT_FILE
        save_json(run.outcome.model_dump(mode="json"), report_path)
        logger.info("Report saved", extra={"path": str(report_path)})

    def _print_final_summary(self, outcome: PipelineOutcome) -> None:
        print_summary_table(
            {
                "Stack": outcome.stack_id or "-",
                "Files planned": outcome.files_planned,
                "Files written": outcome.files_written,
                "Failed files": len(outcome.failed_files),
                "Validation rounds": outcome.attempts,
                "Correction rounds": len(outcome.corrections),
                "Duration": format_duration(outcome.duration_seconds),
            },
            title="Generation Summary",
        )

        if outcome.success:
            border_style = "bold green"
            lines = ["[bold green]GENERATION SUCCEEDED[/bold green]"]
        else:
            border_style = "bold red"
            lines = ["[bold red]GENERATION FAILED[/bold red]"]
            if outcome.error:
                lines.append(escape(outcome.error))
            elif outcome.final_stage is Stage.DONE_FAILURE and outcome.validation is not None:
                lines.append("Validation still fails after the last attempt; manual review needed.")

        lines.extend(["", f"Output : {escape(outcome.project_path)}"])
        if outcome.project_removed:
            lines.append("[yellow]The project directory was removed.[/yellow]")

        console.print()
        console.print(Panel("\n".join(lines), title="[bold]Generation Complete[/bold]", border_style=border_style))
        if outcome.fix_summary:
            logger.warning("Manual review needed", extra={"summary": outcome.fix_summary})


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m stackforge.pipeline``."""
    import argparse

    from stackforge.config import LLMConfig, LLMProvider, ValidationMode
    from stackforge.logging_config import setup_logging
    from stackforge.models import ProjectType

    parser = argparse.ArgumentParser(
        description="Stackforge -- scaffold a project with a text generator, then validate and correct it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  stackforge --project-name shop --frontend Vue --frontend-framework "Vue + Vite"\n'
            "  stackforge --project-name api --project-type backend --backend PHP --backend-framework Laravel\n"
            "  stackforge --project-name shop --frontend Vue --validation-mode both --mismatch-policy keep\n"
        ),
    )
    parser.add_argument("--project-name", default="my-project", help="Project name (default: my-project)")
    parser.add_argument("--project-path", default=None, help="Target directory (default: <output>/<project-name>)")
    parser.add_argument("--output", "-o", default=None, help="Parent directory for new projects")
    parser.add_argument(
        "--project-type",
        choices=[t.value for t in ProjectType],
        default=ProjectType.FRONTEND.value,
    )
    parser.add_argument("--frontend", default="", help="Frontend technology, e.g. Vue")
    parser.add_argument("--frontend-framework", default="", help='Frontend flavour, e.g. "Vue + Vite"')
    parser.add_argument("--css-framework", default="None", help="CSS framework or None")
    parser.add_argument("--backend", default="", help="Backend technology, e.g. PHP")
    parser.add_argument("--backend-framework", default="", help="Backend framework, e.g. Laravel")
    parser.add_argument("--validation-mode", choices=[m.value for m in ValidationMode], default=None)
    parser.add_argument("--mismatch-policy", choices=[p.value for p in MismatchPolicy], default=None)
    parser.add_argument("--official-root", default=None, help="Directory of reference snapshots")
    parser.add_argument("--max-attempts", type=int, default=None, help="Validation rounds (default: 3)")
    parser.add_argument("--provider", choices=[p.value for p in LLMProvider], default=None)
    parser.add_argument("--model", default=None, help="Model name for the selected provider")
    parser.add_argument("--log-dir", default=None, help="Directory for run logs")

    args = parser.parse_args(argv)

    config = Config.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.log_dir:
        config.log_dir = Path(args.log_dir)
    llm_overrides: dict[str, str] = {}
    if args.provider and LLMProvider(args.provider) is not config.llm.provider:
        llm_overrides.update(provider=args.provider, model="")
    if args.model:
        llm_overrides["model"] = args.model
    if llm_overrides:
        config.llm = LLMConfig.model_validate({**config.llm.model_dump(), **llm_overrides})
    if args.validation_mode:
        config.validation.mode = ValidationMode(args.validation_mode)
    if args.mismatch_policy:
        config.validation.mismatch_policy = MismatchPolicy(args.mismatch_policy)
    if args.official_root:
        config.validation.official_files_root = Path(args.official_root)
    if args.max_attempts is not None:
        if args.max_attempts < 1:
            console.print("[bold red]Error:[/bold red] --max-attempts must be >= 1")
            sys.exit(2)
        config.validation.max_attempts = args.max_attempts

    preferences = Preferences(
        project_name=args.project_name,
        project_path=Path(args.project_path) if args.project_path else config.output_dir / args.project_name,
        project_type=ProjectType(args.project_type),
        frontend=args.frontend,
        frontend_framework=args.frontend_framework,
        css_framework=args.css_framework,
        backend=args.backend,
        backend_framework=args.backend_framework,
    )

    log_path = setup_logging(config.log_dir, level=config.log_level, keep=config.log_keep)
    console.print(f"[dim]Logging to {escape(str(log_path))}[/dim]")

    pipeline = GenerationPipeline(config)
    outcome = asyncio.run(pipeline.run(preferences))

    if outcome.success:
        console.print("[bold green]Project generated successfully![/bold green]")
    else:
        console.print("[bold red]Project generation failed.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
