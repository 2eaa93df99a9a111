"""Simulate historical sound changes on word forms."""

import logging
import pathlib
import pprint
from pathlib import Path

import click
import pandas as pd

from .constants import EVOLVED_PREFIX
from .correlator import MalformedRuleError, compile_notation
from .matcher import apply_rule
from .rule_objects import preprocess_rules
from .syllables import SyllableAnalyser
from .utils import (
    break_into_vowels_and_consonants,
    ensure_path_exists,
    get_mark,
    load_config,
    load_wordlist,
    make_list,
    set_logging_config,
    time_process,
    write_table,
)

CFG = {
    "rules_file": str(Path(__file__).parent / "config" / "rules.py"),
    "ruleset": "ancient_telerin",
    "output_dir": "data/output",
    "include_y": False,
    "include_w": False,
}
CONFIG_FILE = load_config("./config.py")
CFG.update(CONFIG_FILE)
CONTEXT_SETTINGS = dict(
    default_map=CFG,
    help_option_names=["-h", "--help"],
)


def ensure_dir(ctx, param, path):
    if path is None:
        path = CFG.get("output_dir")
    return ensure_path_exists(path)


def split_multiple_args(ctx, param, arg):
    """Create a list from an argument that may hold comma-separated values."""
    if arg is None:
        return []
    return [item for value in arg for item in make_list(value)]


def configure_logging(ctx, param, verbose):
    """Configure logging level and destination based on user input."""
    logfile = ctx.params.get("log_file")
    return set_logging_config(verbose, logfile=logfile)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-l",
    "--log-file",
    type=click.Path(resolve_path=True, dir_okay=False, path_type=pathlib.Path),
    is_eager=True,
    help="Write all logging messages to the given file.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    callback=configure_logging,
    help="Print logging messages to the console. "
         "-v is informative, -vv is detailed (for debugging)."
)
@click.option(
    "--include-y/--no-include-y",
    help="Count 'y' as a vowel when syllabifying.",
)
@click.option(
    "--include-w/--no-include-w",
    help="Count 'w' as a vowel when syllabifying.",
)
@click.pass_context
def main(ctx, log_file, verbose, include_y, include_w):
    """Apply sound change rules to word forms, and analyse their syllables.

    Default values for the rules file, the ruleset and the output directory
    are specified in the config.py file.

    If provided, CLI arguments override the default values from the config.
    """
    logging.info("START LOG")
    CFG.update(ctx.params)
    if verbose:
        click.secho("Configuration values:", fg="yellow", err=True)
        click.echo(pprint.pformat(CFG), err=True)
    ctx.obj = SyllableAnalyser(include_y=include_y, include_w=include_w)


@main.command("syllabify")
@click.argument("words", nargs=-1, required=True)
@click.option(
    "-c", "--compound", is_flag=True,
    help="Do not merge digraphs that may span a morpheme boundary.")
@click.pass_obj
def syllabify_words(analyser, words, compound):
    """Split each word into syllables."""
    for word in words:
        click.echo("·".join(analyser.syllabify(word, compound=compound)))


@main.command("analyse")
@click.argument("word")
@click.option(
    "-c", "--compound", is_flag=True,
    help="Do not merge digraphs that may span a morpheme boundary.")
@click.pass_obj
def analyse_word(analyser, word, compound):
    """Show the onset, nucleus, coda, weight and stress of each syllable."""
    syllables = analyser.analyse(word, compound=compound)
    table = pd.DataFrame([syllable.to_dict() for syllable in syllables])
    table["shape"] = [
        break_into_vowels_and_consonants(s.syllable) for s in syllables]
    click.echo(table.to_string(index=False))


@main.command("compile")
@click.argument("notation")
def compile_rule(notation):
    """Compile a rule notation and print its rewrite steps."""
    try:
        compiled = compile_notation(notation)
    except MalformedRuleError as error:
        raise click.BadParameter(str(error), param_hint="NOTATION")
    for variant in compiled:
        compiled_dict = variant.to_dict()
        for step in compiled_dict["steps"]:
            for key in ("old_mark", "new_mark"):
                if key in step:
                    step[key] = get_mark(step[key])
        click.echo(pprint.pformat(compiled_dict, sort_dicts=False))


@main.command("apply")
@click.argument("notation")
@click.argument("words", nargs=-1, required=True)
def apply_notation(notation, words):
    """Apply a single rule to each word."""
    try:
        compiled = compile_notation(notation)
    except MalformedRuleError as error:
        raise click.BadParameter(str(error), param_hint="NOTATION")
    for word in words:
        result = word
        for variant in compiled:
            result = apply_rule(variant, word)
            if result != word:
                break
        click.echo(f"{word} -> {result}")


@main.command("evolve")
@click.argument("words", nargs=-1)
@click.option(
    "-r",
    "--rules-file",
    type=click.Path(resolve_path=True, exists=True, dir_okay=False,
                    path_type=pathlib.Path),
    help="Load rulesets from the given file path.",
    default=CFG.get("rules_file"),
)
@click.option(
    "-s",
    "--ruleset",
    type=str,
    help="Name of the ruleset to apply.",
    default=CFG.get("ruleset"),
)
@click.option(
    "-w",
    "--words-file",
    type=click.Path(resolve_path=True, exists=True, dir_okay=False,
                    path_type=pathlib.Path),
    help="Csv file with a 'word' column, and optionally a 'compound' column.",
)
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(resolve_path=True, file_okay=False, path_type=pathlib.Path),
    callback=ensure_dir,
    help="The directory path that files are written to.",
)
@click.option(
    "-e",
    "--enable",
    multiple=True,
    callback=split_multiple_args,
    help="Names of rules to enable, comma-separated.",
)
@click.option(
    "-d",
    "--disable",
    multiple=True,
    callback=split_multiple_args,
    help="Names of rules to disable, comma-separated.",
)
@click.option(
    "-c", "--compound", is_flag=True,
    help="Treat the WORDS as compounds when checking syllable conditions.")
@click.pass_obj
@time_process
def evolve_words(analyser, words, rules_file, ruleset, words_file, output_dir,
                 enable, disable, compound):
    """Run the rules of a ruleset in order over each word."""
    rulesets = preprocess_rules(rules_file, ruleset)
    if not rulesets:
        raise click.UsageError(f"No ruleset {ruleset!r} in {rules_file}")
    rule_set = rulesets[0]
    try:
        for name in enable:
            rule_set.toggle_rule(name, True)
        for name in disable:
            rule_set.toggle_rule(name, False)
    except KeyError as error:
        raise click.BadParameter(str(error), param_hint="--enable/--disable")
    if rule_set.skipped:
        click.secho(
            "Skipped rules: " + ", ".join(r.name for r in rule_set.skipped),
            fg="yellow", err=True)

    rows = []
    for word in words:
        result, changes = rule_set.apply(
            word, analyser=analyser, compound=compound)
        for change in changes:
            click.echo(f"  {change.order_id} {change.rule}: "
                       f"{change.before} -> {change.after}")
        click.secho(f"{word} -> {result}", fg="cyan")
        rows.append({"word": word, "evolved": result,
                     "rules": ",".join(c.rule for c in changes)})

    if words_file is not None:
        wordlist = load_wordlist(words_file)
        for word, is_compound in zip(wordlist["word"], wordlist["compound"]):
            result, changes = rule_set.apply(
                word, analyser=analyser, compound=bool(is_compound))
            rows.append({"word": word, "evolved": result,
                         "rules": ",".join(c.rule for c in changes)})
        filename = output_dir / f"{EVOLVED_PREFIX}_{rule_set.name}.csv"
        write_table(filename, pd.DataFrame(rows, columns=["word", "evolved", "rules"]))
        click.secho(f"Output is in {filename}", fg="cyan", err=True)
