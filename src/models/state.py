"""
Program state model and pipeline helper

Defines ProgramState dataclass for the CLI's functional pipeline and the
pipeline() helper for composing stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field

if TYPE_CHECKING:
    from .record import RecordSchema


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    Each stage receives a state, copies it, adds its own fields, and returns
    the copy.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, mode, schema,
          schemaFile, template, stripTranslate, outputFile
        - env_check: inputSourceFile, outputTargetFile, recordSchema, envOK
        - source_read: sourceText
        - mode_run: result (record dict/None for extract, wikitext for serialize)
        - results_write: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the input file
        outputdir: Directory the result is written to
        verbosity: Logging verbosity level (1-3)
        inputFile: Input filename (relative to inputdir)
        mode: "extract" (wikitext -> JSON) or "serialize" (JSON -> wikitext)
        schema: Built-in schema name
        schemaFile: Optional YAML file defining a custom schema
        template: Optional template name overriding the schema's
        stripTranslate: Strip translation markup from extracted values
        outputFile: Output filename (relative to outputdir), mode default if empty
        envOK: Environment validation passed
        inputSourceFile: Resolved path to input file
        outputTargetFile: Resolved path to output file
        recordSchema: Schema in effect after overrides
        sourceText: Contents of the input file
        result: Output of the extract/serialize stage
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    mode: str = field(default="extract")
    schema: str = field(default="wish")
    schemaFile: Optional[str] = field(default=None)
    template: Optional[str] = field(default=None)
    stripTranslate: bool = field(default=False)
    outputFile: str = field(default="")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputTargetFile: Path = field(default=Path("/"))
    recordSchema: Optional["RecordSchema"] = field(default=None)
    sourceText: str = field(default="")
    result: Optional[Any] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options that are not ProgramState fields are dropped.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing the input file
            outputdir: Directory for output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options: Dict[str, Any] = {
            k: v for k, v in vars(options).items() if k in valid_fields
        }
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(initial_state, env_check, source_read, mode_run, results_write)

    is equivalent to results_write(mode_run(source_read(env_check(initial_state)))).
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
