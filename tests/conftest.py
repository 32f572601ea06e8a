"""PyTest fixtures for the mrrd package."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import ismrmrd
import pytest
import torch
from mrrd.data import Acquisition, Dataset

from tests import RandomGenerator


def generate_random_encodingcounter_properties(generator: RandomGenerator) -> dict[str, Any]:
    return {
        'kspace_encode_step_1': generator.uint16(),
        'kspace_encode_step_2': generator.uint16(),
        'average': generator.uint16(),
        'slice': generator.uint16(),
        'contrast': generator.uint16(),
        'phase': generator.uint16(),
        'repetition': generator.uint16(),
        'set': generator.uint16(),
        'segment': generator.uint16(),
    }


def generate_random_acquisition_properties(generator: RandomGenerator) -> dict[str, Any]:
    return {
        'measurement_uid': generator.uint32(),
        'scan_counter': generator.uint32(),
        'acquisition_time_stamp': generator.uint32(),
        'discard_pre': generator.uint16(),
        'discard_post': generator.uint16(),
        'center_sample': generator.uint16(),
        'encoding_space_ref': generator.uint16(),
        'sample_time_us': generator.float32(),
    }


def random_acquisition(
    generator: RandomGenerator, channels: int = 4, samples: int = 32, trajectory_dimensions: int = 0
) -> Acquisition:
    """Acquisition with random samples, trajectory and header entries."""
    kspace = generator.complex64_tensor((channels, samples))
    traj = generator.float32_tensor((samples, trajectory_dimensions), -0.5, 0.5) if trajectory_dimensions else None
    acquisition = Acquisition.from_kspace(kspace, traj)
    for key, value in generate_random_acquisition_properties(generator).items():
        setattr(acquisition.head, key, value)
    acquisition.head.idx = ismrmrd.EncodingCounters(**generate_random_encodingcounter_properties(generator))
    return acquisition


@pytest.fixture(params=({'seed': 0},))
def random_kspace_line(request) -> torch.Tensor:
    """Complex samples of 4 channels with 32 samples each."""
    generator = RandomGenerator(request.param['seed'])
    return generator.complex64_tensor((4, 32))


@pytest.fixture(params=({'seed': 0, 'trajectory_dimensions': 0}, {'seed': 1, 'trajectory_dimensions': 2}))
def random_acquisition_fixture(request) -> Acquisition:
    """Random acquisition with and without trajectory."""
    generator = RandomGenerator(request.param['seed'])
    return random_acquisition(generator, trajectory_dimensions=request.param['trajectory_dimensions'])


@pytest.fixture
def dataset_filename(tmp_path: Path) -> Path:
    """Path of a not yet existing HDF5 file."""
    return tmp_path / 'dataset.h5'


@pytest.fixture
def dataset(dataset_filename: Path) -> Iterator[Dataset]:
    """Empty dataset, closed after the test."""
    with Dataset(dataset_filename) as ds:
        yield ds
