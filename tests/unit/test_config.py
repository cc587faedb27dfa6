import argparse

import pytest
from fusionfinder.config import CustomHelpFormatter, augment_parser, get_metavar
from fusionfinder.constants import cast_boolean
from fusionfinder.util import filepath


class TestGetMetavar:
    def test_types(self):
        assert get_metavar(bool) == '{True,False}'
        assert get_metavar(cast_boolean) == '{True,False}'
        assert get_metavar(int) == 'INT'
        assert get_metavar(float) == 'FLOAT'
        assert get_metavar(filepath) == 'FILEPATH'
        assert get_metavar(str) is None


class TestAugmentParser:
    def test_defaults(self):
        parser = argparse.ArgumentParser(formatter_class=CustomHelpFormatter)
        augment_parser(['max_mate_gap', 'split_read_tolerance'], parser)
        args = parser.parse_args(['--max_mate_gap', '500'])
        assert args.max_mate_gap == 500
        assert args.split_read_tolerance == 2

    def test_required_group(self):
        parser = argparse.ArgumentParser()
        group = parser.add_argument_group('required arguments')
        augment_parser(['annotations'], group)
        with pytest.raises(SystemExit):
            parser.parse_args([])

    def test_optional_annotations(self, tmp_path):
        annotations = tmp_path / 'annotations.json'
        annotations.write_text('{}')
        parser = argparse.ArgumentParser()
        augment_parser(['annotations'], parser)
        assert parser.parse_args([]).annotations is None
        assert parser.parse_args(['--annotations', str(annotations)]).annotations == str(annotations)

    def test_invalid_argument(self):
        with pytest.raises(KeyError):
            augment_parser(['not_an_argument'], argparse.ArgumentParser())
