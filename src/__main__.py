#!/usr/bin/env python3
"""
wishtext - Template invocation extraction for wikitext records

Reads a wish, vote or focus area record out of a page's wikitext (or writes
one back) without rendering the page.

This tool follows the ChRIS "plugin" convention: positional input and output
directories, with options naming the files inside them.

Usage:
    wishtext inputdir/ outputdir/ --inputFile page.wiki

Examples:
    # Extract the wish on a page to outputdir/record.json
    wishtext . out/ --inputFile Wish.wiki

    # Extract a vote, stripping <translate> markup from values
    wishtext . out/ --inputFile Votes.wiki --schema vote --stripTranslate

    # Write a record back as wikitext to outputdir/record.wiki
    wishtext . out/ --inputFile record.json --mode serialize

    # Use a custom schema defined in YAML
    wishtext . out/ --inputFile page.wiki --schemaFile petition.yaml -vv
"""

import sys
import json
from dataclasses import replace
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import RecordTemplate, SchemaRegistry, __version__, LOG, state_connectToLogger
from .models import ProgramState, SchemaError, pipeline


DEFAULT_OUTPUT_FILES = {
    "extract": "record.json",
    "serialize": "record.wiki",
}

parser = ArgumentParser(
    description="wishtext - read and write template-stored records in wikitext",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input file (relative to inputdir)"
)

parser.add_argument(
    "--mode",
    default="extract",
    choices=sorted(DEFAULT_OUTPUT_FILES),
    help="extract: wikitext -> JSON record; serialize: JSON record -> wikitext",
)

parser.add_argument(
    "--schema", default="wish", type=str, help="Built-in record schema (wish, vote, focusarea)"
)

parser.add_argument(
    "--schemaFile",
    default=None,
    type=str,
    help="YAML schema definition (relative to inputdir); overrides --schema",
)

parser.add_argument(
    "--template", default=None, type=str, help="Template name overriding the schema's"
)

parser.add_argument(
    "--stripTranslate",
    action="store_true",
    default=False,
    help="Strip <translate>, <tvar> and <!--T:n--> markup from extracted values",
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help="Output file (relative to outputdir). Defaults to record.json / record.wiki",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment, resolve paths and the record schema.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved input path
            - outputTargetFile: Resolved output path
            - recordSchema: Schema after --schemaFile/--template overrides
            - envOK: True if environment is valid

    Exits:
        1 if the input file is missing or the schema cannot be resolved
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    registry = SchemaRegistry()
    try:
        if state.schemaFile:
            schema_path = Path(state.schemaFile)
            if not schema_path.is_absolute():
                schema_path = state.inputdir / schema_path
            schema = registry.schema_loadFromYAML(schema_path)
        else:
            schema = registry.get(state.schema)
    except SchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.template:
        schema = replace(schema, template_name=state.template)
    state.recordSchema = schema
    LOG(f"Schema: {schema.name} ({schema.template_name})", level=2)

    output_name = state.outputFile or DEFAULT_OUTPUT_FILES[state.mode]
    state.outputTargetFile = state.outputdir / output_name
    state.outputTargetFile.parent.mkdir(parents=True, exist_ok=True)
    LOG(f"Output file: {state.outputTargetFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input file.

    Returns:
        ProgramState with added field:
            - sourceText: Input file contents

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def mode_run(inputstate: ProgramState) -> ProgramState:
    """
    Extract a record from wikitext, or serialize a JSON record to wikitext.

    Returns:
        ProgramState with added field:
            - result: Record dict (or None if not found) for extract,
                      wikitext string for serialize

    Exits:
        1 if the serialize input is not a JSON object of strings
    """
    state = inputstate.copy()
    template = RecordTemplate(state.recordSchema, strip_translations=state.stripTranslate)

    if state.mode == "extract":
        LOG(f"Extracting {state.recordSchema.name} record...", level=1)
        state.result = template.record_extract(state.sourceText)
        if state.result is None:
            LOG(f"No {state.recordSchema.template_name} invocation found", level=1)
        return state

    LOG(f"Serializing {state.recordSchema.name} record...", level=1)
    try:
        record = json.loads(state.sourceText)
    except json.JSONDecodeError as e:
        print(f"Error: input is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(record, dict):
        print("Error: input JSON must be an object", file=sys.stderr)
        sys.exit(1)

    try:
        state.result = template.wikitext_make(record)
    except TypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if not template.edit_validate(record):
        LOG("Warning: record does not survive a write/read cycle unchanged", level=1)
    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the result to the output file and report.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    if state.mode == "extract":
        output = json.dumps(state.result, indent=2, ensure_ascii=False) + "\n"
    else:
        output = state.result + "\n"
    state.outputTargetFile.write_text(output, encoding="utf-8")

    LOG(f"✓ Wrote {state.outputTargetFile}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="wishtext - template record extraction",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - extract or serialize one record.

    Orchestrates the pipeline:
        1. env_check: Validate paths, resolve schema
        2. source_read: Read the input file
        3. mode_run: Extract or serialize
        4. results_write: Write output

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, mode_run, results_write)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
