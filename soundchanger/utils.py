"""Utility functions for soundchanger"""

import functools
import importlib.util
import logging
import sys
import unicodedata
from datetime import datetime
from pathlib import Path
from typing import Union, Generator, Dict

import click
import pandas as pd
from schema import SchemaError

from .constants import (
    COMBINING_TO_SPACING,
    SPACING_TO_COMBINING,
    SUBSCRIPT_DIGITS,
    VOWEL_MARKS,
    VOWELS,
    ruleset_schema,
    wordlist_column_names,
    wordlist_schema,
)


def is_mark(char: str) -> bool:
    """Whether the string contains a combining mark."""
    return any(unicodedata.category(c).startswith("M") for c in char or "")


def is_vowel(char: str, include_y: bool = True, include_w: bool = False) -> bool:
    """Whether the first base character of ``char`` is a vowel."""
    if not char:
        return False
    vowels = VOWELS
    if include_y:
        vowels += "y"
    if include_w:
        vowels += "w"
    return unicodedata.normalize("NFD", char)[0].lower() in vowels


def is_consonant(char: str) -> bool:
    return bool(char) and not is_vowel(char)


def is_subscript_digit(char: str) -> bool:
    return bool(char) and len(char) == 1 and char in SUBSCRIPT_DIGITS


def subscript_to_normal(text: str) -> str:
    """Convert subscript digits to plain digits, e.g. 'H₂O' -> 'H2O'."""
    if not text:
        return text
    return "".join(
        str(SUBSCRIPT_DIGITS.index(c)) if c in SUBSCRIPT_DIGITS else c
        for c in text
    )


def get_mark(char: str) -> str:
    """Return the diacritic of a character.

    Single combining marks with a spacing equivalent are returned in
    their spacing form (e.g. 'á' -> '´'), other marks are returned as
    they are. Characters without marks give an empty string.
    """
    decomposed = unicodedata.normalize("NFD", char)
    if not is_mark(decomposed):
        return ""
    marks = decomposed if is_mark(decomposed[0]) else decomposed[1:]
    return COMBINING_TO_SPACING.get(marks, marks)


def add_mark(char: str, mark: str) -> str:
    """Attach a spacing or combining diacritic and compose the result."""
    combining = SPACING_TO_COMBINING.get(mark, mark)
    return unicodedata.normalize("NFC", char + combining)


def remove_marks(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return unicodedata.normalize(
        "NFC", "".join(c for c in decomposed if not is_mark(c)))


def remove_vowel_marks(text: str) -> str:
    """Remove length, stress and quality marks, keep consonant diacritics."""
    decomposed = unicodedata.normalize("NFD", text)
    return unicodedata.normalize(
        "NFC", "".join(c for c in decomposed if c not in VOWEL_MARKS))


def nth(text: str, index: int) -> str:
    """Character at ``index``; negative indices count from the end.

    Returns an empty string when the index is out of range.
    """
    position = len(text) + index if index < 0 else index
    if 0 <= position < len(text):
        return text[position]
    return ""


def break_into_vowels_and_consonants(text: str) -> str:
    """Describe a string as a pattern of V and C, e.g. 'banana' -> 'CVCVCV'."""
    composed = unicodedata.normalize("NFC", text)
    return "".join("V" if is_vowel(c) else "C" for c in composed)


def ensure_path_exists(path):
    """Make sure a directory exists and is a Path object."""
    path_obj = Path(path)
    path_obj.mkdir(exist_ok=True, parents=True)
    return path_obj


def write_table(output_file: Union[str, Path], data: pd.DataFrame):
    """Write a DataFrame to a csv file with a header and no index."""
    logging.info("Write table to %s", output_file)
    data.to_csv(output_file, header=True, index=False)


def resolve_rel_path(file_rel_path: Union[str, Path]) -> Path:
    """Resolve the full path from a potential relative path to the local or parent directory."""

    full_path = Path(file_rel_path).resolve()
    if not full_path.exists():
        full_path = Path.cwd().parent / file_rel_path
    return full_path


def load_module_from_path(file_path):
    """Use importlib to load a module from a .py file path."""
    module_path = resolve_rel_path(file_path)
    assert module_path.suffix == ".py", (
            f"Inappropriate file type: {module_path.suffix} ({file_path})")
    module_name = module_path.stem

    spec = importlib.util.spec_from_file_location(module_name, module_path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    spec.loader.exec_module(module)
    return module


def load_module_dict(module_path) -> Dict:
    """Load a dict of the public variables defined in a python module, ``{var_name:value}``."""
    module = load_module_from_path(module_path)
    return {
        key: value for key, value in module.__dict__.items()
        if value and not key.startswith("_")
        and not isinstance(value, type(module))
        and not callable(value)
    }


def load_config(filename) -> Dict:
    """Load variable names (lower case) and their values as a dict from a .py file."""
    try:
        return {k.lower(): v for k, v in load_module_dict(filename).items()}
    except FileNotFoundError:
        return {}


def load_rules(file_path: Union[str, Path]) -> Generator:
    """Load rulesets from a .py file and validate the ruleset dicts.

    Module variables that are not dicts, such as imported helpers, are
    ignored. Invalid ruleset dicts are logged and skipped.
    """
    rulesets = load_module_dict(file_path)

    for name, ruleset_dict in rulesets.items():
        if not isinstance(ruleset_dict, dict):
            continue
        try:
            ruleset_schema.validate(ruleset_dict)
        except SchemaError as error:
            logging.error("SKIPPING RULESET %s BECAUSE OF %s", name, type(error))
            logging.error("Error message: %s", error)
            continue
        yield ruleset_dict


def load_wordlist(csv_path: Union[str, Path]) -> pd.DataFrame:
    """Load a csv file of words into a validated pandas DataFrame.

    These are the columns read from the csv file:
        "word": the word form to process
        "compound": Optional. Whether the word is a compound,
            which affects syllabification. Defaults to False

    Parameters
    ----------
    csv_path: str or pathlib.Path
        Path to a single csv file with a header row

    Returns
    -------
    pd.DataFrame
    """
    full_path = resolve_rel_path(csv_path)
    wordlist = pd.read_csv(
        full_path,
        header=0,
        index_col=None,
        usecols=lambda x: x in wordlist_column_names,
        dtype={"word": str},
    )
    if "compound" not in wordlist.columns:
        wordlist["compound"] = False
    return wordlist_schema.validate(wordlist)


def make_list(value, segments=False):
    """Turn a string, list or other collection into a list.

    Split a string on comma, newline, whitespace(set segments=True) or characters.
    """
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        if segments:
            return value.split(" ")
        if "," in value:
            return [v.strip(" ") for v in value.split(",")]
        if "\n" in value:
            return value.strip("\n").split("\n")
        return [value]
    return list(value)


def time_process(f):
    """Take the time of the process from start to end."""
    def new_func(*args, **kwargs):

        start = datetime.now()
        result = f(*args, **kwargs)
        end = datetime.now()
        click.secho(f"Processing time: {str(end - start)}", fg="blue", err=True)
        return result

    functools.update_wrapper(new_func, f)
    return new_func


def log_level(verbosity: int):
    """Calculate the log level given by the number of -v flags.

    0 = logging.WARNING (30)
    1 = logging.INFO (20)
    2 = logging.DEBUG (10)
    """
    return (3 - verbosity) * 10 if verbosity in (0, 1, 2) else 10


def set_logging_config(verbose=0, logfile=None):
    """Configure logging level and destination based on user input."""
    root_logger = logging.getLogger("")
    if logfile is not None:
        logging.basicConfig(
            level=logging.DEBUG,
            format=(
                "%(asctime)s | %(levelname)s "
                "| %(module)s-%(funcName)s-%(lineno)04d | %(message)s"),
            datefmt='%Y-%m-%d %H:%M',
            filename=logfile,
            filemode='a')

    if verbose:
        # define a Handler which writes log messages to stderr
        console = logging.StreamHandler()
        console.setLevel(log_level(verbose))
        # set a format which is simpler for console use
        formatter = logging.Formatter(
            '%(asctime)-10s | %(levelname)s | %(message)s')
        console.setFormatter(formatter)
        root_logger.addHandler(console)
        root_logger.setLevel(min(root_logger.level or logging.WARNING,
                                 log_level(verbose)))

    return verbose
