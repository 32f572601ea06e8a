"""Acquisition (readout) record."""

from __future__ import annotations

from dataclasses import dataclass, field

import h5py
import ismrmrd
import numpy as np
import torch
from einops import rearrange
from typing_extensions import Self

from mrrd.data.enums import AcqFlags
from mrrd.data.exceptions import InvalidAcquisitionError, ShapeMismatchError

ACQUISITION_HEADER_VERSION = 1
"""Version written to the header of new acquisitions."""

# Creating the dtype once also avoids the cpython warning
# raised if np.array(AcquisitionHeader) is called directly.
ACQUISITION_HEADER_DTYPE = np.dtype(ismrmrd.AcquisitionHeader)
"""Structured dtype of the acquisition header."""

ACQUISITION_DTYPE = np.dtype(
    [
        ('head', ACQUISITION_HEADER_DTYPE),
        ('traj', h5py.vlen_dtype(np.dtype('float32'))),
        ('data', h5py.vlen_dtype(np.dtype('float32'))),
    ]
)
"""Compound dtype of one row of the acquisition stream, as written by ISMRMRD."""


def _new_header() -> ismrmrd.AcquisitionHeader:
    head = ismrmrd.AcquisitionHeader()
    head.version = ACQUISITION_HEADER_VERSION
    return head


def _empty_float_tensor() -> torch.Tensor:
    return torch.zeros(0, dtype=torch.float32)


@dataclass(slots=True, eq=False)
class Acquisition:
    """A single readout: fixed layout header and interleaved complex samples.

    The samples are stored as in ISMRMRD: the complex payload has shape `(active_channels, number_of_samples)`, i.e.
    all samples of the first channel precede those of the second channel. Each complex sample is stored as a
    real/imaginary pair, so `data` is ``[Re(c0,s0), Im(c0,s0), Re(c0,s1), Im(c0,s1), ..., Re(c1,s0), ...]``.
    """

    head: ismrmrd.AcquisitionHeader = field(default_factory=_new_header)
    """Acquisition header."""

    data: torch.Tensor = field(default_factory=_empty_float_tensor)
    """Samples as float32 real/imaginary pairs, length `2 * number_of_samples * active_channels`."""

    traj: torch.Tensor = field(default_factory=_empty_float_tensor)
    """Trajectory as float32, length `trajectory_dimensions * number_of_samples`, sample-major."""

    @classmethod
    def from_kspace(cls, samples: torch.Tensor, traj: torch.Tensor | None = None) -> Self:
        """Create an acquisition from complex k-space samples.

        The number of samples and active channels in the header are set from the shape of `samples`.

        Parameters
        ----------
        samples
            complex samples with shape `(active_channels, number_of_samples)`
        traj
            trajectory with shape `(number_of_samples, trajectory_dimensions)`. Can be None.
        """
        if samples.ndim != 2:
            raise ShapeMismatchError(f'Expected samples of shape (channels, samples), got {tuple(samples.shape)}.')
        head = _new_header()
        head.active_channels, head.number_of_samples = samples.shape
        head.available_channels = head.active_channels
        data = torch.view_as_real(samples.to(dtype=torch.complex64))
        data = rearrange(data, 'channels samples complex -> (channels samples complex)')
        if traj is None:
            traj_ = _empty_float_tensor()
        else:
            if traj.ndim != 2 or traj.shape[0] != samples.shape[1]:
                raise ShapeMismatchError(
                    f'Expected trajectory of shape ({samples.shape[1]}, dimensions), got {tuple(traj.shape)}.'
                )
            head.trajectory_dimensions = traj.shape[1]
            traj_ = rearrange(traj.to(dtype=torch.float32), 'samples dimensions -> (samples dimensions)')
        return cls(head, data.contiguous(), traj_.contiguous())

    @property
    def samples(self) -> torch.Tensor:
        """Complex samples with shape `(active_channels, number_of_samples)`."""
        self.validate()
        data = rearrange(
            self.data,
            '(channels samples complex) -> channels samples complex',
            channels=self.head.active_channels,
            complex=2,
        )
        return torch.view_as_complex(data.contiguous())

    @property
    def trajectory(self) -> torch.Tensor:
        """Trajectory with shape `(number_of_samples, trajectory_dimensions)`."""
        self.validate()
        return self.traj.reshape(self.head.number_of_samples, self.head.trajectory_dimensions)

    def validate(self) -> None:
        """Check the payload against the header.

        Raises
        ------
        ShapeMismatchError
            if the length of data or traj does not match the header
        InvalidAcquisitionError
            if more channels are active than available
        """
        if self.data.ndim != 1 or self.data.dtype != torch.float32:
            raise ShapeMismatchError(
                f'Data must be a flat float32 tensor, got {self.data.dtype} with shape {tuple(self.data.shape)}.'
            )
        expected = 2 * self.head.number_of_samples * self.head.active_channels
        if self.data.numel() != expected:
            raise ShapeMismatchError(
                f'Data has {self.data.numel()} values, but the header requires 2 * {self.head.number_of_samples} '
                f'samples * {self.head.active_channels} channels = {expected}.'
            )
        expected_traj = self.head.trajectory_dimensions * self.head.number_of_samples
        if self.traj.ndim != 1 or self.traj.numel() != expected_traj:
            raise ShapeMismatchError(
                f'Trajectory has {self.traj.numel()} values, but the header requires {expected_traj}.'
            )
        if self.head.active_channels > self.head.available_channels:
            raise InvalidAcquisitionError(
                f'{self.head.active_channels} active channels exceed {self.head.available_channels} available channels.'
            )

    def set_flag(self, flag: AcqFlags) -> None:
        """Set a flag in the header."""
        self.head.flags |= flag.value

    def clear_flag(self, flag: AcqFlags) -> None:
        """Clear a flag in the header."""
        self.head.flags &= ~flag.value

    def clear_all_flags(self) -> None:
        """Clear all flags in the header."""
        self.head.flags = 0

    def is_flag_set(self, flag: AcqFlags) -> bool:
        """Check if a flag is set in the header."""
        return bool(self.head.flags & flag.value)

    def head_record(self) -> np.ndarray:
        """Header as a structured numpy array of length one."""
        return np.frombuffer(bytes(self.head), dtype=ACQUISITION_HEADER_DTYPE).copy()

    def to_record(self) -> np.ndarray:
        """Acquisition as a row of the acquisition stream, a structured numpy array of length one."""
        record = np.zeros(1, dtype=ACQUISITION_DTYPE)
        record['head'] = self.head_record()
        record['traj'][0] = self.traj.numpy(force=True)
        record['data'][0] = self.data.numpy(force=True)
        return record

    @classmethod
    def from_record(cls, record: np.ndarray) -> Self:
        """Create an acquisition from a row of the acquisition stream."""
        record = np.atleast_1d(record)
        return cls(
            head=cls.head_from_record(record['head']),
            data=torch.from_numpy(np.array(record['data'][0], dtype=np.float32)),
            traj=torch.from_numpy(np.array(record['traj'][0], dtype=np.float32)),
        )

    @staticmethod
    def head_from_record(record: np.ndarray) -> ismrmrd.AcquisitionHeader:
        """Create a header from a structured numpy record."""
        return ismrmrd.AcquisitionHeader.from_buffer_copy(np.asarray(record, dtype=ACQUISITION_HEADER_DTYPE).tobytes())

    def __eq__(self, other: object) -> bool:
        """Equal if header, data and trajectory agree."""
        if not isinstance(other, Acquisition):
            return NotImplemented
        return (
            bytes(self.head) == bytes(other.head)
            and torch.equal(self.data, other.data)
            and torch.equal(self.traj, other.traj)
        )

    def __repr__(self) -> str:
        """Representation method for Acquisition class."""
        return (
            f'{type(self).__name__}(kspace_encode_step_1={self.head.idx.kspace_encode_step_1}, '
            f'number_of_samples={self.head.number_of_samples}, active_channels={self.head.active_channels}, '
            f'flags={self.head.flags})'
        )
