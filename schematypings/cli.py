import logging
from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from schematypings.codegen.codegen import Codegen
from schematypings.config import CodegenConfig, DocumentConfig, get_config
from schematypings.exceptions import SchemaTypingsError

console = Console()
app = typer.Typer(
    name='schematypings',
    help='Generate TypeScript typings from a JSON-schema API description',
    no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    schema_dir: Annotated[
        str | None,
        typer.Option(
            '--schema-dir', help='Directory or URL with the schema documents'
        ),
    ] = None,
    out_dir: Annotated[
        str | None,
        typer.Option('--out-dir', help='Output directory for the typings'),
    ] = None,
    methods: Annotated[
        str,
        typer.Option(
            '--methods', help='Comma-separated methods to generate, e.g. "users.*"'
        ),
    ] = '*',
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Log generation progress')
    ] = False,
) -> None:
    """Generate TypeScript typings from configuration or from the given options.

    Examples:
        schematypings generate
        schematypings generate --config my-config.yaml
        schematypings generate --schema-dir ./vk-api-schema --out-dir ./typings --methods "users.*"
    """
    _setup_logging(verbose)

    try:
        if schema_dir or out_dir:
            if not (schema_dir and out_dir):
                raise typer.BadParameter(
                    '--schema-dir and --out-dir must be given together'
                )
            codegen_config = CodegenConfig(
                documents=[
                    DocumentConfig(source=schema_dir, output=out_dir, methods=methods)
                ]
            )
        else:
            codegen_config = get_config(config)

        for document_config in codegen_config.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating typings for {document_config.source} '
                    f'in {document_config.output}...',
                    total=None,
                )

                files = Codegen(document_config).generate()

                progress.update(
                    task,
                    description=f'Typings generated for {document_config.source}!',
                )

            console.print(
                f'[green]Successfully generated {len(files)} files[/green] '
                f'in {document_config.output}'
            )

    except (SchemaTypingsError, typer.BadParameter) as e:
        console.print(f'[red]Error:[/red] {escape(str(e))}')
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show the version of schematypings."""
    try:
        console.print(f'schematypings version: {package_version("schematypings")}')
    except PackageNotFoundError:
        console.print('schematypings version: unknown')


if __name__ == '__main__':
    app()
