#!/usr/bin/env python3
"""
CV Tailoring CLI

Extracts a resume PDF, streams a CV tailored to a job offer from an LLM, and
renders it to a paginated PDF.

Commands:
    extract  - Print the text extracted from a resume PDF
    generate - Generate a tailored CV as JSON
    render   - Render a CV JSON file to PDF
    tailor   - Generate and render in one go

Examples:\n

    tailor_cv.py extract resume.pdf                                 # Check extraction

    tailor_cv.py generate resume.pdf job.txt -o cv.json             # Generate JSON

    tailor_cv.py render cv.json --preset page_letter --verify       # Render to PDF

    tailor_cv.py tailor resume.pdf job.txt --attempts 3             # Full pipeline
"""

import json
import os
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from cvforge.contexts.generation import (
    GenerationError,
    StreamState,
    StructuredDocument,
    generate_document,
)
from cvforge.contexts.generation.logger import setup_generation_logger
from cvforge.contexts.intake import ExtractionError, InputValidationError, extract_text_from_file
from cvforge.contexts.intake.logger import setup_intake_logger
from cvforge.contexts.rendering import (
    LayoutConfigError,
    MeasurementError,
    RenderResult,
    output_filename,
    render_document,
)
from cvforge.contexts.rendering.logger import setup_rendering_logger
from cvforge.utils.llm import get_provider
from cvforge.utils.timestamp import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


app = typer.Typer(
    help="Tailor a resume to a job offer with an LLM and render it to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _log_dir(command: str) -> Path:
    return LOGS_PATH / f"{command}_{now()}"


class _ProgressPrinter:
    """Echoes newly streamed text as it arrives."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.printed = 0

    def __call__(self, state: StreamState) -> None:
        if self.quiet:
            return
        if len(state.raw_text) < self.printed:
            # A retry started from an empty buffer
            typer.echo("")
            self.printed = 0
        typer.echo(state.raw_text[self.printed :], nl=False)
        self.printed = len(state.raw_text)


def _generate(
    resume_pdf: Path,
    job_offer_file: Path,
    provider_name: Optional[str],
    model: Optional[str],
    attempts: int,
    quiet: bool,
) -> StructuredDocument:
    try:
        cv_text = extract_text_from_file(resume_pdf)
    except ExtractionError as e:
        _fail(str(e))

    job_offer = job_offer_file.read_text(encoding="utf-8")

    try:
        provider = get_provider(provider_name=provider_name, model=model)
    except (ImportError, ValueError) as e:
        _fail(str(e))

    setup_generation_logger(_log_dir("generate"), provider_name=provider.name)

    typer.secho(f"\nGenerating with {provider.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        document = generate_document(
            cv_text,
            job_offer,
            provider=provider,
            on_update=_ProgressPrinter(quiet=quiet),
            max_attempts=attempts,
        )
    except InputValidationError as e:
        _fail(str(e))
    except GenerationError as e:
        typer.echo("")
        typer.secho("✗ Generation failed", fg=typer.colors.RED, bold=True, err=True)
        _fail(f"{e}\nPlease try again.")

    typer.echo("\n")
    typer.secho("✓ Generation succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Name: {document.full_name}")
    typer.echo(f"  Sections: {', '.join(section.heading for section in document.sections)}")
    return document


def _render(
    document: StructuredDocument, output: Path, presets: Optional[List[str]], verify: bool
) -> RenderResult:
    setup_rendering_logger(_log_dir("render"), presets=presets)

    try:
        result = render_document(document, output_path=output, presets=presets, verify=verify)
    except (LayoutConfigError, MeasurementError) as e:
        _fail(str(e))

    if result.success:
        typer.secho("✓ Rendering succeeded", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(
            f"✗ Verification failed with {len(result.issues)} issues",
            fg=typer.colors.RED,
            bold=True,
        )
        for issue in result.issues[:10]:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)
        if len(result.issues) > 10:
            typer.echo(f"  ... and {len(result.issues) - 10} more")

    typer.echo(f"  Pages: {result.page_count}")
    typer.echo(f"  PDF: {result.pdf_path}")
    return result


ProviderOption = Annotated[
    Optional[str],
    typer.Option("--provider", help="LLM provider: openai or anthropic (default: LLM_PROVIDER)"),
]
ModelOption = Annotated[
    Optional[str], typer.Option("--model", "-m", help="Model name (default: LLM_MODEL)")
]
AttemptsOption = Annotated[
    int,
    typer.Option(
        "--attempts",
        "-a",
        help="Whole-generation attempts before giving up",
        min=1,
        max=5,
    ),
]
QuietOption = Annotated[
    bool, typer.Option("--quiet", "-q", help="Don't echo the model output while it streams")
]
PresetOption = Annotated[
    Optional[List[str]],
    typer.Option(
        "--preset",
        "-p",
        help="Layout preset, repeatable (e.g., page_letter, palette_monochrome)",
    ),
]
VerifyOption = Annotated[
    bool, typer.Option("--verify", help="Read the PDF back and check it against the layout")
]


@app.command("extract")
def extract_command(
    resume_pdf: Annotated[Path, typer.Argument(help="Resume PDF", exists=True, dir_okay=False)],
):
    """
    Print the text extracted from a resume PDF.

    Examples:\n

        $ tailor_cv.py extract resume.pdf
    """
    setup_intake_logger(_log_dir("extract"))
    try:
        text = extract_text_from_file(resume_pdf)
    except ExtractionError as e:
        _fail(str(e))

    typer.echo(text)


@app.command("generate")
def generate_command(
    resume_pdf: Annotated[Path, typer.Argument(help="Resume PDF", exists=True, dir_okay=False)],
    job_offer_file: Annotated[
        Path, typer.Argument(help="Text file with the job offer", exists=True, dir_okay=False)
    ],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Where to write the CV JSON")
    ] = None,
    provider_name: ProviderOption = None,
    model: ModelOption = None,
    attempts: AttemptsOption = 1,
    quiet: QuietOption = False,
):
    """
    Generate a tailored CV and write it as JSON.

    Examples:\n

        $ tailor_cv.py generate resume.pdf job.txt -o cv.json

        $ tailor_cv.py generate resume.pdf job.txt --provider anthropic --attempts 3
    """
    document = _generate(resume_pdf, job_offer_file, provider_name, model, attempts, quiet)

    content = json.dumps(document.to_dict(), indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(content)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content + "\n", encoding="utf-8")
        typer.echo(f"  JSON: {output}")
    typer.echo("")


@app.command("render")
def render_command(
    document_json: Annotated[
        Path, typer.Argument(help="CV JSON from 'generate'", exists=True, dir_okay=False)
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="PDF path (default: <Name>_CV.pdf next to the JSON)"),
    ] = None,
    presets: PresetOption = None,
    verify: VerifyOption = False,
):
    """
    Render a CV JSON file to PDF.

    Examples:\n

        $ tailor_cv.py render cv.json

        $ tailor_cv.py render cv.json -p page_letter -p spacing_compact --verify
    """
    try:
        data = json.loads(document_json.read_text(encoding="utf-8"))
        document = StructuredDocument.from_dict(data)
    except json.JSONDecodeError as e:
        _fail(f"{document_json} is not valid JSON: {e}")
    except GenerationError as e:
        _fail(f"{document_json} is not a valid CV: {e}")

    if output is None:
        output = document_json.parent / output_filename(document.full_name)

    typer.secho(f"\nRendering: {document_json}", fg=typer.colors.BLUE, bold=True)
    result = _render(document, output, presets, verify)
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("tailor")
def tailor_command(
    resume_pdf: Annotated[Path, typer.Argument(help="Resume PDF", exists=True, dir_okay=False)],
    job_offer_file: Annotated[
        Path, typer.Argument(help="Text file with the job offer", exists=True, dir_okay=False)
    ],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for JSON and PDF (default: dated results)"),
    ] = None,
    provider_name: ProviderOption = None,
    model: ModelOption = None,
    attempts: AttemptsOption = 1,
    presets: PresetOption = None,
    verify: VerifyOption = False,
    quiet: QuietOption = False,
):
    """
    Generate a tailored CV and render it to PDF.

    Writes <Name>_CV.json and <Name>_CV.pdf to RESULTS_PATH/<today>/ unless
    --output-dir is given.

    Examples:\n

        $ tailor_cv.py tailor resume.pdf job.txt

        $ tailor_cv.py tailor resume.pdf job.txt -p palette_monochrome --verify
    """
    document = _generate(resume_pdf, job_offer_file, provider_name, model, attempts, quiet)

    if output_dir is None:
        output_dir = RESULTS_PATH / today()
    pdf_path = output_dir / output_filename(document.full_name)
    json_path = pdf_path.with_suffix(".json")

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path.write_text(
        json.dumps(document.to_dict(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )
    typer.echo(f"  JSON: {json_path}")
    typer.echo("")

    result = _render(document, pdf_path, presets, verify)
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


if __name__ == "__main__":
    app()
