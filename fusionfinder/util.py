from datetime import datetime
from glob import glob
import logging
import os
import time

from braceexpand import braceexpand
import pandas as pd

from .constants import sort_columns


class Log:
    """
    wrapper aroung the builtin logging to make it more readable
    """
    def __init__(self, indent_str='  ', indent_level=0, level=logging.INFO):
        self.indent_str = indent_str
        self.indent_level = indent_level
        self.level = level

    def __call__(self, *pos, time_stamp=False, level=None, indent_level=0, **kwargs):
        if self.level is None:
            return
        elif level is None:
            level = self.level

        stamp = datetime.now().strftime('[%Y-%m-%d %H:%M:%S]') if time_stamp else ' ' * 21
        indent_prefix = self.indent_str * (self.indent_level + indent_level)
        message = '{} {}{}'.format(stamp, indent_prefix, ' '.join([str(p) for p in pos]))
        logging.getLogger('fusionfinder').log(level, message, **kwargs)

    def indent(self):
        return Log(self.indent_str, self.indent_level + 1, self.level)

    def __enter__(self):
        return self

    def __exit__(self, *pos):
        pass


LOG = Log()
DEVNULL = Log(level=None)


def bash_expands(*expressions):
    """
    resolve file expressions which may use bash-style braces as well as glob wildcards

    Returns:
        list: absolute paths of the matching files, grouped by expression

    Raises:
        FileNotFoundError: an expression does not match any file
    """
    result = []
    for expression in expressions:
        matches = [fname for name in braceexpand(expression) for fname in sorted(glob(name))]
        if not matches:
            raise FileNotFoundError('no files match the expression', expression)
        result.extend([os.path.abspath(fname) for fname in matches])
    return result


def filepath(path):
    """
    argparse type for an option naming exactly one existing file
    """
    try:
        matches = bash_expands(path)
    except FileNotFoundError:
        raise TypeError('file does not exist', path)
    if len(matches) != 1:
        raise TypeError('expected a single file but the expression matched several', path, matches)
    return matches[0]


def log_arguments(args):
    """
    echo the parsed command line arguments, one per line
    """
    LOG('arguments', time_stamp=True)
    with LOG.indent() as log:
        for arg, val in sorted(args.items()):
            if isinstance(val, list) and len(val) > 1:
                log(arg, '= [')
                for item in val:
                    log(repr(item), indent_level=1)
                log(']')
            else:
                log(arg, '=', repr(val))


def mkdirp(dirname):
    LOG("creating output directory: '{}'".format(dirname))
    os.makedirs(dirname, exist_ok=True)
    return dirname


def format_duration(start_time):
    """
    Returns:
        str: the time elapsed since start_time as hh:mm:ss
    """
    minutes, seconds = divmod(int(time.time()) - start_time, 60)
    hours, minutes = divmod(minutes, 60)
    return '{}:{:02d}:{:02d}'.format(hours, minutes, seconds)


def output_tabbed_file(rows, filename, header=None):
    """
    write a list of row dictionaries (or objects with a flatten method) to a tab-delimited file
    """
    if header is None:
        custom_header = False
        header = set()
    else:
        custom_header = True
    flat_rows = []
    for row in rows:
        if not isinstance(row, dict):
            row = row.flatten()
        flat_rows.append(row)
        if not custom_header:
            header.update(row.keys())
    header = sort_columns(header)
    LOG('writing:', filename)
    df = pd.DataFrame.from_records(flat_rows, columns=header)
    df = df.fillna('None')
    df.to_csv(filename, columns=header, index=False, sep='\t')


def generate_complete_stamp(output_dir, log=DEVNULL, prefix='FUSIONFINDER.', start_time=None):
    """
    mark an output directory as complete. The stamp holds the run time when start_time is given

    Returns:
        str: path to the stamp file
    """
    stamp = os.path.join(output_dir, '{}COMPLETE'.format(prefix))
    log('complete:', stamp)
    with open(stamp, 'w') as fh:
        if start_time is not None:
            fh.write('run time (hh/mm/ss): {}\n'.format(format_duration(start_time)))
            fh.write('run time (s): {}\n'.format(int(time.time()) - start_time))
    return stamp
