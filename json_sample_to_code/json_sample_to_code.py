import json
import logging

import click

from .cli_utils import reconstruct_command_line
from .pipeline import (
    CodeGeneratorConfig,
    GeneratedCodeError,
    NotParsableInput,
    OutputMode,
    PipelineGenerator,
    SampleError,
    collect_samples,
)

EXIT_SUCCESS = 0
EXIT_OUTPUT_EXISTS = 5


def load_config(path: str | None) -> CodeGeneratorConfig:
    """Load the configuration file, or the defaults when no file is given."""
    if path is None:
        return CodeGeneratorConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return CodeGeneratorConfig.from_dict(data)
    except (UnicodeDecodeError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint=f"--config {path}") from e


def read_input(json_file) -> str:
    try:
        return json_file.read()
    except UnicodeDecodeError as e:
        raise NotParsableInput(f"Input is not valid UTF-8: {e}") from e


@click.command()
@click.option("--classname", "-n", default="NewDto", type=str, help="Class name of the root class")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="python", type=click.Choice(["python", "cs"]))
@click.option("--typed/--no-typed", default=True, help="Emit inferred types instead of the fallback type")
@click.option("--optional", is_flag=True, default=False, help="Make all fields optional (nullable with default null)")
@click.option("--multipart", is_flag=True, default=False, help="Merge an array of objects into a single class covering all variants")
@click.option("--dry", is_flag=True, default=False, help="Dry run, print generated files")
@click.option("--output-dir", "-o", default=".", type=click.Path(file_okay=False, resolve_path=True))
@click.option("--force", is_flag=True, default=False, help="Overwrite existing files")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("namespace", type=str)
@click.argument("json_file", default="-", type=click.File("r", encoding="utf-8"))
@click.pass_context
def json_sample_to_code(ctx, classname, config, language, typed, optional, multipart, dry, output_dir, force, verbose, namespace, json_file):
    """Generate classes for NAMESPACE from a JSON or JSON Lines sample (stdin when JSON_FILE is omitted)."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(config)

    # CLI flags override the config file
    config.typed = config.typed and typed
    config.all_optional = config.all_optional or optional
    if force:
        config.output.mode = OutputMode.FORCE

    try:
        samples = collect_samples(read_input(json_file), multipart=multipart)
        codegen = PipelineGenerator(
            classname,
            samples.values,
            namespace,
            config,
            language,
            multipart=samples.multipart,
            command_line=reconstruct_command_line(json_sample_to_code),
        )

        if dry:
            for path, source in codegen.generate().items():
                click.echo(path)
                click.echo("")
                click.echo(source)
            ctx.exit(EXIT_SUCCESS)

        for path in codegen.write(output_dir):
            click.echo(f"Created {path}")
    except SampleError as e:
        click.echo(str(e), err=True)
        ctx.exit(e.exit_code)
    except FileExistsError as e:
        click.echo(str(e), err=True)
        ctx.exit(EXIT_OUTPUT_EXISTS)
    except GeneratedCodeError as e:
        raise click.ClickException(str(e)) from e
