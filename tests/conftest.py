from pathlib import Path
from typing import List

import pytest

from lisp_reader import StreamReader, ReadSyntaxError

data_dir = Path(__file__).parent / 'data'


@pytest.fixture()
def fixture_sample_path() -> Path:
    yield data_dir / 'sample.scm'


@pytest.fixture()
def fixture_sample_expected() -> List[str]:
    with data_dir.joinpath('sample.out').open() as f:
        yield f.read().splitlines()


@pytest.fixture()
def fixture_errors() -> List[ReadSyntaxError]:
    yield []


@pytest.fixture()
def fixture_stream_reader(fixture_sample_path: Path, fixture_errors: List[ReadSyntaxError]):
    with fixture_sample_path.open() as f:
        reader = StreamReader.from_file(f, on_error=fixture_errors.append)
        yield reader
