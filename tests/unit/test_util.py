import logging
import os
from unittest import mock as _mock

import pandas as pd
import pytest
from fusionfinder.constants import COLUMNS
from fusionfinder.util import (
    DEVNULL,
    Log,
    bash_expands,
    filepath,
    format_duration,
    generate_complete_stamp,
    mkdirp,
    output_tabbed_file,
)

from .mock import Mock


class TestBashExpands:
    def test_braces(self, tmp_path):
        for name in ['a.tab', 'b.tab', 'c.tab']:
            (tmp_path / name).write_text('')
        result = bash_expands(str(tmp_path / '{a,c}.tab'))
        assert [os.path.basename(f) for f in result] == ['a.tab', 'c.tab']

    def test_no_match(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            bash_expands(str(tmp_path / 'missing.tab'))


class TestFilepath:
    def test_multiple_matches(self, tmp_path):
        (tmp_path / 'a.json').write_text('')
        (tmp_path / 'b.json').write_text('')
        with pytest.raises(TypeError):
            filepath(str(tmp_path / '*.json'))

    def test_missing(self, tmp_path):
        with pytest.raises(TypeError):
            filepath(str(tmp_path / 'a.json'))


class TestLog:
    def test_level(self, caplog):
        caplog.set_level(logging.DEBUG)
        log = Log()
        log('message', 1, level=logging.WARNING)
        assert caplog.records[-1].levelno == logging.WARNING
        assert caplog.records[-1].getMessage().endswith('message 1')

    def test_indent(self, caplog):
        caplog.set_level(logging.INFO)
        with Log().indent() as log:
            log('indented')
        assert caplog.records[-1].getMessage().endswith('  indented')

    def test_devnull(self, caplog):
        caplog.set_level(logging.DEBUG)
        DEVNULL('nothing')
        assert not caplog.records


class TestOutputTabbedFile:
    def test_flatten_objects(self, tmp_path):
        output = str(tmp_path / 'out.tab')
        rows = [
            Mock(flatten=lambda: {COLUMNS.gene2: 'B', COLUMNS.gene1: 'A', COLUMNS.filter: None}),
            {COLUMNS.gene1: 'C', COLUMNS.gene2: 'D', COLUMNS.filter: 'hairpin'},
        ]
        output_tabbed_file(rows, output)
        df = pd.read_csv(output, sep='\t', dtype=str, keep_default_na=False)
        assert list(df.columns) == [COLUMNS.gene1, COLUMNS.gene2, COLUMNS.filter]
        assert df[COLUMNS.filter].tolist() == ['None', 'hairpin']


class TestGenerateCompleteStamp:
    def test_stamp(self, tmp_path):
        stamp = generate_complete_stamp(str(tmp_path), start_time=0)
        assert stamp == os.path.join(str(tmp_path), 'FUSIONFINDER.COMPLETE')
        with open(stamp) as fh:
            assert fh.read().startswith('run time (hh/mm/ss):')

    def test_no_start_time(self, tmp_path):
        stamp = generate_complete_stamp(str(tmp_path), prefix='FIND.')
        assert os.path.basename(stamp) == 'FIND.COMPLETE'
        with open(stamp) as fh:
            assert fh.read() == ''


class TestFormatDuration:
    def test_hours_minutes_seconds(self):
        with _mock.patch('fusionfinder.util.time.time', return_value=1000 + 3 * 3600 + 2 * 60 + 5):
            assert format_duration(1000) == '3:02:05'

    def test_zero(self):
        with _mock.patch('fusionfinder.util.time.time', return_value=50):
            assert format_duration(50) == '0:00:00'


class TestMkdirp:
    def test_nested_and_existing(self, tmp_path):
        dirname = str(tmp_path / 'a' / 'b')
        assert mkdirp(dirname) == dirname
        assert mkdirp(dirname) == dirname
        assert os.path.isdir(dirname)
