"""MR raw dataset XML header dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field

from ismrmrd import xsd
from typing_extensions import Self

from mrrd.data.EncodingLimits import EncodingLimits
from mrrd.data.enums import TrajectoryType
from mrrd.data.SpatialDimension import SpatialDimension
from mrrd.utils.unit_conversion import m_to_mm, mm_to_m

ISMRMRD_NAMESPACE = 'http://www.ismrm.org/ISMRMRD'
"""Default namespace of the XML header."""


def _matrix_size(matrix: SpatialDimension[int]) -> xsd.matrixSizeType:
    return xsd.matrixSizeType(x=matrix.x, y=matrix.y, z=matrix.z)


@dataclass(slots=True)
class Encoding:
    """Encoding section of the header."""

    encoding_matrix: SpatialDimension[int]
    """Dimensions of the encoded k-space matrix."""

    encoding_fov: SpatialDimension[float]
    """Field of view of the image encoded by the k-space trajectory [m]."""

    recon_matrix: SpatialDimension[int]
    """Dimensions of the reconstruction matrix."""

    recon_fov: SpatialDimension[float]
    """Field-of-view of the reconstructed image [m]."""

    encoding_limits: EncodingLimits = field(default_factory=EncodingLimits)
    """Ranges of the acquisition indices."""

    trajectory_type: TrajectoryType = TrajectoryType.CARTESIAN
    """Type of trajectory."""

    @classmethod
    def from_ismrmrd(cls, encoding: xsd.encodingType) -> Self:
        """Create an Encoding from an ismrmrd.encodingType."""
        return cls(
            encoding_matrix=SpatialDimension[int].from_xyz(encoding.encodedSpace.matrixSize),
            encoding_fov=SpatialDimension[float].from_xyz(encoding.encodedSpace.fieldOfView_mm).apply(mm_to_m),
            recon_matrix=SpatialDimension[int].from_xyz(encoding.reconSpace.matrixSize),
            recon_fov=SpatialDimension[float].from_xyz(encoding.reconSpace.fieldOfView_mm).apply(mm_to_m),
            encoding_limits=EncodingLimits.from_ismrmrd_encoding_limits_type(encoding.encodingLimits),
            trajectory_type=TrajectoryType(encoding.trajectory.value),
        )

    def to_ismrmrd(self) -> xsd.encodingType:
        """Create an ismrmrd.encodingType."""
        encoding_fov_mm = self.encoding_fov.apply(m_to_mm)
        recon_fov_mm = self.recon_fov.apply(m_to_mm)
        encoded_space = xsd.encodingSpaceType(
            matrixSize=_matrix_size(self.encoding_matrix),
            fieldOfView_mm=xsd.fieldOfViewMm(x=encoding_fov_mm.x, y=encoding_fov_mm.y, z=encoding_fov_mm.z),
        )
        recon_space = xsd.encodingSpaceType(
            matrixSize=_matrix_size(self.recon_matrix),
            fieldOfView_mm=xsd.fieldOfViewMm(x=recon_fov_mm.x, y=recon_fov_mm.y, z=recon_fov_mm.z),
        )
        return xsd.encodingType(
            encodedSpace=encoded_space,
            reconSpace=recon_space,
            encodingLimits=self.encoding_limits.to_ismrmrd_encoding_limits_type(),
            trajectory=xsd.trajectoryType(self.trajectory_type.value),
        )


@dataclass(slots=True)
class MrrdHeader:
    """Experiment description stored as XML next to the raw data.

    Only the parts of the ISMRMRD header needed to describe a Cartesian dataset are covered.
    """

    lamor_frequency_proton: int
    """Lamor frequency of hydrogen nuclei [Hz]."""

    encodings: list[Encoding] = field(default_factory=list)
    """Encoding sections. A valid header has at least one."""

    @classmethod
    def from_ismrmrd(cls, header: xsd.ismrmrdHeader) -> Self:
        """Create a header from an ismrmrd.ismrmrdHeader."""
        return cls(
            lamor_frequency_proton=header.experimentalConditions.H1resonanceFrequency_Hz,
            encodings=[Encoding.from_ismrmrd(encoding) for encoding in header.encoding],
        )

    def to_ismrmrd(self) -> xsd.ismrmrdHeader:
        """Create an ismrmrd.ismrmrdHeader."""
        if not self.encodings:
            raise ValueError('The header needs at least one encoding.')
        return xsd.ismrmrdHeader(
            experimentalConditions=xsd.experimentalConditionsType(
                H1resonanceFrequency_Hz=int(self.lamor_frequency_proton)
            ),
            encoding=[encoding.to_ismrmrd() for encoding in self.encodings],
        )

    @classmethod
    def from_xml(cls, xml: str) -> Self:
        """Parse the XML text of a header."""
        return cls.from_ismrmrd(xsd.CreateFromDocument(xml))

    def to_xml(self) -> str:
        """Serialize to XML with the ISMRMRD namespace as default namespace."""
        return self.to_ismrmrd().toXML('utf-8')
