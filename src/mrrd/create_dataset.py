"""Create a test dataset: a square phantom, its k-space, one acquisition per k-space line and an XML header."""

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from mrrd.data.Acquisition import Acquisition
from mrrd.data.Dataset import Dataset
from mrrd.data.EncodingLimits import EncodingLimits, Limits
from mrrd.data.enums import AcqFlags, ElementType, TrajectoryType
from mrrd.data.MrrdHeader import Encoding, MrrdHeader
from mrrd.data.NDArray import NDArray
from mrrd.data.SpatialDimension import SpatialDimension
from mrrd.phantoms.RectanglePhantom import RectanglePhantom
from mrrd.utils.fft import image_to_kspace
from mrrd.utils.log import start_log


def _encoding_fov_factory() -> SpatialDimension[float]:
    return SpatialDimension(z=0.006, y=0.3, x=0.6)


def _recon_fov_factory() -> SpatialDimension[float]:
    return SpatialDimension(z=0.006, y=0.3, x=0.3)


@dataclass(frozen=True)
class DatasetConfig:
    """Parameters of the test dataset."""

    filename: Path = Path('testdata.h5')
    """HDF5 file the dataset is written to."""

    group: str = 'dataset'
    """Name of the dataset group within the file."""

    readout: int = 256
    """Number of samples per readout, i.e. image width."""

    phase_encoding_lines: int = 128
    """Number of phase encoding lines, i.e. image height."""

    lamor_frequency_proton: int = 63_500_000
    """Lamor frequency of hydrogen nuclei [Hz], ~1.5T."""

    sample_time_us: float = 5.0
    """Time between samples [us]."""

    encoding_fov: SpatialDimension[float] = field(default_factory=_encoding_fov_factory)
    """Field of view of the encoded space [m]."""

    recon_fov: SpatialDimension[float] = field(default_factory=_recon_fov_factory)
    """Field of view of the reconstructed image [m]."""

    def __post_init__(self) -> None:
        """Check the matrix size."""
        if self.readout < 2 or self.phase_encoding_lines < 2:
            raise ValueError(
                f'readout and phase_encoding_lines must be at least 2, got {self.readout} and '
                f'{self.phase_encoding_lines}'
            )


def create_header(config: DatasetConfig) -> MrrdHeader:
    """Create the XML header describing the test dataset.

    The readout is twofold oversampled, so the recon matrix is half as wide as the encoded matrix.
    """
    limits = EncodingLimits(
        k1=Limits(min=0, max=config.phase_encoding_lines - 1, center=config.phase_encoding_lines // 2)
    )
    encoding = Encoding(
        encoding_matrix=SpatialDimension(z=1, y=config.phase_encoding_lines, x=config.readout),
        encoding_fov=config.encoding_fov,
        recon_matrix=SpatialDimension(z=1, y=config.phase_encoding_lines, x=config.readout // 2),
        recon_fov=config.recon_fov,
        encoding_limits=limits,
        trajectory_type=TrajectoryType.CARTESIAN,
    )
    return MrrdHeader(lamor_frequency_proton=config.lamor_frequency_proton, encodings=[encoding])


def create_test_dataset(config: DatasetConfig | None = None) -> Path:
    """Create the test dataset.

    Parameters
    ----------
    config
        parameters of the dataset. If None, the default parameters are used.

    Returns
    -------
        path of the written file
    """
    config = DatasetConfig() if config is None else config
    readout, phase_encoding_lines = config.readout, config.phase_encoding_lines

    with Dataset(config.filename, config.group) as dataset:
        # the image is kept in the file next to its k-space
        phantom = RectanglePhantom()
        image = phantom.image_space(SpatialDimension(z=1, y=phase_encoding_lines, x=readout))
        dataset.append_array('the_square', NDArray(image))

        img_test = dataset.read_array('the_square', 0, element_type=ElementType.CXFLOAT)
        logger.info('Image array dimensions: {}', ' '.join(str(d) for d in img_test.dims))

        kspace = NDArray(image_to_kspace(img_test.data))
        dataset.append_array('the_square_k', kspace)

        for line in range(phase_encoding_lines):
            # one channel, one k-space line of readout samples
            acq = Acquisition.from_kspace(kspace.data[line : line + 1])
            acq.clear_all_flags()
            if line == 0:
                acq.set_flag(AcqFlags.ACQ_FIRST_IN_SLICE)
            if line == phase_encoding_lines - 1:
                acq.set_flag(AcqFlags.ACQ_LAST_IN_SLICE)
            acq.head.idx.kspace_encode_step_1 = line
            acq.head.active_channels = 1
            acq.head.available_channels = 1
            acq.head.number_of_samples = readout
            acq.head.center_sample = readout // 2
            acq.head.sample_time_us = config.sample_time_us
            dataset.append_acquisition(acq)
        logger.info('Appended {} acquisitions', dataset.number_of_acquisitions())

        dataset.write_header(create_header(config).to_xml())

    logger.info('Wrote test dataset to {}:/{}', config.filename, config.group)
    return config.filename


def main() -> int:
    """Create the test dataset with default parameters.

    Returns
    -------
        exit code, 0 on success and 1 on failure
    """
    start_log()
    logger.info('MR raw dataset test dataset creation')
    try:
        create_test_dataset()
    except Exception as e:  # noqa: BLE001
        # one line, also for multi-line messages
        logger.error('Error creating test dataset: {}: {}', type(e).__name__, ' '.join(str(e).split()))
        return 1
    return 0
