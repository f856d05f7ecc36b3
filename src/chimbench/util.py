import errno
import logging
import os
from glob import glob
from typing import Dict, Iterable, List, Optional

import pandas as pd
from braceexpand import braceexpand

from .constants import cast_boolean

logger = logging.getLogger('chimbench')


def bash_expands(*expressions: str) -> List[str]:
    """
    expand a file glob expression, allowing bash-style brackets.

    Returns:
        a list of files

    Example:
        >>> bash_expands('./{test,doc}/*py')
        [...]
    """
    result = []
    for expression in expressions:
        eresult = []
        for name in braceexpand(expression):
            for fname in glob(name):
                eresult.append(fname)
        if not eresult:
            raise FileNotFoundError('The expression does not match any files', expression)
        result.extend(eresult)
    return [os.path.abspath(f) for f in result]


def filepath(path: str) -> str:
    try:
        file_list = bash_expands(path)
    except FileNotFoundError:
        raise TypeError('File does not exist', path)
    else:
        if len(file_list) > 1:
            raise TypeError('File pattern match multiple files and expected only one', path)
    return file_list[0]


def cast(value, cast_func):
    """
    cast a value to a given type

    Example:
        >>> cast('1', int)
        1
    """
    if cast_func == bool:
        value = cast_boolean(value)
    else:
        value = cast_func(value)
    return value


def log_arguments(args):
    """
    output the arguments to the console

    Args:
        args (Namespace): the namespace to print arguments for
    """
    logger.info('arguments')

    indent = ' '

    for arg, val in sorted(args.__dict__.items()):
        if isinstance(val, list):
            if len(val) <= 1:
                logger.info(f'{indent}{arg} = {val}')
                continue
            logger.info(f'{indent}{arg} = [')
            for v in val:
                logger.info(f'{indent * 2}{repr(v)}')
            logger.info(f'{indent}]')
        elif any([isinstance(val, typ) for typ in [str, int, float, bool, tuple]]) or val is None:
            logger.info(f'{indent}{arg} = {repr(val)}')
        else:
            logger.info(f'{arg} = {object.__repr__(val)}')


def mkdirp(dirname: str) -> str:
    """
    Make a directory or path of directories. Suppresses the error that is normally raised when the directory already exists
    """
    logger.info(f"creating output directory: '{dirname}'")
    try:
        os.makedirs(dirname)
    except OSError as exc:
        if exc.errno == errno.EEXIST and os.path.isdir(dirname):
            pass
        else:
            raise exc
    return dirname


def read_junction_ids(filename: str) -> List[str]:
    """
    reads the junction ids from the first column of a tab-delimited file with a header line.
    Any other columns are ignored

    Returns:
        the ids in file order, duplicates included
    """
    logger.info(f'loading: {filename}')
    try:
        df = pd.read_csv(
            filename,
            sep='\t',
            usecols=[0],
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        logger.warning(f'ignoring empty file: {filename}')
        return []
    ids = [str(v).strip() for v in df.iloc[:, 0].tolist()]
    ids = [v for v in ids if v]
    logger.info(f'loaded {len(ids)} junction ids ({len(set(ids))} distinct)')
    return ids


def output_tabbed_file(rows: Iterable[Dict], filename: str, header: List[str]):
    """
    write a list of records as a tab-delimited file with a header line
    """
    logger.info(f'writing: {filename}')
    df = pd.DataFrame.from_records(list(rows), columns=header)
    df = df.fillna('None')
    df.to_csv(filename, columns=header, index=False, sep='\t')


def output_list_file(lines: Iterable, filename: str, header: Optional[str] = None):
    """
    write one value per line, each value can be a list which is written tab-delimited
    """
    logger.info(f'writing: {filename}')
    with open(filename, 'w') as fh:
        if header is not None:
            fh.write(header + '\n')
        for line in lines:
            if isinstance(line, (list, tuple)):
                line = '\t'.join([str(c) for c in line])
            fh.write(str(line) + '\n')
