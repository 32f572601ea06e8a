"""Tests for the Acquisition class."""

import pytest
import torch
from mrrd.data import Acquisition
from mrrd.data.enums import AcqFlags
from mrrd.data.exceptions import InvalidAcquisitionError, ShapeMismatchError

from tests import RandomGenerator


def test_acquisition_from_kspace_header():
    """Number of samples and channels are taken from the shape."""
    kspace = RandomGenerator(0).complex64_tensor((4, 32))
    acquisition = Acquisition.from_kspace(kspace)
    assert acquisition.head.number_of_samples == 32
    assert acquisition.head.active_channels == 4
    assert acquisition.head.available_channels == 4
    assert acquisition.head.trajectory_dimensions == 0
    assert acquisition.data.shape == (2 * 4 * 32,)
    assert acquisition.traj.numel() == 0


def test_acquisition_payload_layout():
    """Channel-major, samples fastest, real/imaginary interleaved."""
    kspace = torch.tensor([[1 + 2j, 3 + 4j, 5 + 6j], [7 + 8j, 9 + 10j, 11 + 12j]], dtype=torch.complex64)
    acquisition = Acquisition.from_kspace(kspace)
    assert torch.equal(acquisition.data, torch.arange(1, 13, dtype=torch.float32))


def test_acquisition_samples(random_kspace_line):
    """The samples property recovers the complex samples."""
    acquisition = Acquisition.from_kspace(random_kspace_line)
    assert torch.equal(acquisition.samples, random_kspace_line)


def test_acquisition_trajectory():
    generator = RandomGenerator(2)
    traj = generator.float32_tensor((32, 3))
    acquisition = Acquisition.from_kspace(generator.complex64_tensor((2, 32)), traj)
    assert acquisition.head.trajectory_dimensions == 3
    assert acquisition.traj.shape == (96,)
    assert torch.equal(acquisition.trajectory, traj)


def test_acquisition_trajectory_wrong_shape():
    with pytest.raises(ShapeMismatchError):
        Acquisition.from_kspace(torch.zeros(1, 32, dtype=torch.complex64), torch.zeros(31, 2))


def test_acquisition_from_kspace_wrong_ndim():
    with pytest.raises(ShapeMismatchError):
        Acquisition.from_kspace(torch.zeros(32, dtype=torch.complex64))


def test_acquisition_validate_data_length(random_kspace_line):
    """Data with the wrong number of values is rejected."""
    acquisition = Acquisition.from_kspace(random_kspace_line)
    acquisition.head.number_of_samples = 31
    with pytest.raises(ShapeMismatchError):
        acquisition.validate()


def test_acquisition_validate_channels(random_kspace_line):
    """More active than available channels is invalid."""
    acquisition = Acquisition.from_kspace(random_kspace_line)
    acquisition.head.available_channels = 2
    with pytest.raises(InvalidAcquisitionError):
        acquisition.validate()


def test_acquisition_flags():
    acquisition = Acquisition.from_kspace(torch.zeros(1, 4, dtype=torch.complex64))
    acquisition.set_flag(AcqFlags.ACQ_FIRST_IN_SLICE)
    acquisition.set_flag(AcqFlags.ACQ_USER1)
    assert acquisition.head.flags == (1 << 6) | (1 << 56)
    assert acquisition.is_flag_set(AcqFlags.ACQ_FIRST_IN_SLICE)
    assert not acquisition.is_flag_set(AcqFlags.ACQ_LAST_IN_SLICE)
    acquisition.clear_flag(AcqFlags.ACQ_FIRST_IN_SLICE)
    assert acquisition.head.flags == 1 << 56
    acquisition.clear_all_flags()
    assert acquisition.head.flags == 0


def test_acqflags_bits():
    """Bit positions of the flags."""
    assert AcqFlags.ACQ_FIRST_IN_ENCODE_STEP1.value == 1
    assert AcqFlags.ACQ_FIRST_IN_SLICE.value == 1 << 6
    assert AcqFlags.ACQ_LAST_IN_SLICE.value == 1 << 7
    assert AcqFlags.ACQ_IS_SURFACECOILCORRECTIONSCAN_DATA.value == 1 << 28


def test_acquisition_head_record_roundtrip(random_acquisition_fixture):
    """The header survives the conversion to a structured record."""
    record = random_acquisition_fixture.head_record()
    assert record.shape == (1,)
    head = Acquisition.head_from_record(record)
    assert bytes(head) == bytes(random_acquisition_fixture.head)
    assert record['idx']['kspace_encode_step_1'][0] == random_acquisition_fixture.head.idx.kspace_encode_step_1


def test_acquisition_record_roundtrip(random_acquisition_fixture):
    """An acquisition survives the conversion to a row of the acquisition stream."""
    record = random_acquisition_fixture.to_record()
    assert record.dtype.names == ('head', 'traj', 'data')
    assert Acquisition.from_record(record) == random_acquisition_fixture
