"""MR raw dataset in a HDF5 file."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import TracebackType

import h5py
import numpy as np
import torch
from loguru import logger
from typing_extensions import Self

from mrrd.data.Acquisition import ACQUISITION_DTYPE, Acquisition
from mrrd.data.enums import ElementType
from mrrd.data.exceptions import (
    DatasetClosedError,
    NotFoundError,
    OpenFailedError,
    OutOfRangeError,
    SchemaMismatchError,
    TypeMismatchError,
    WriteFailedError,
)
from mrrd.data.MrrdHeader import MrrdHeader
from mrrd.data.NDArray import NDArray

ACQUISITIONS_PATH = 'data'
"""Name of the acquisition table within the dataset group."""

HEADER_PATH = 'xml'
"""Name of the XML header within the dataset group."""

ELEMENT_TYPE_ATTRIBUTE = 'element_type'
"""Attribute of an array stack holding its element type."""

_ACQUISITION_CHUNK_SIZE = 64


class Dataset:
    """MR raw dataset: a group in a HDF5 file holding arrays, acquisitions and an XML header.

    Layout within the group:
        - ``<name>``: array stack of shape `(n, ..., d1, d0)` for each array name
        - ``data``: acquisition stream, one row `(head, traj, data)` per acquisition as in ISMRMRD
        - ``xml``: UTF-8 XML header

    The dataset exclusively owns the file while it is open. Use it as a context manager or call `close`
    to flush and release the file.
    """

    def __init__(self, filename: str | Path, group: str = 'dataset', create_if_needed: bool = True) -> None:
        """Open a dataset.

        Parameters
        ----------
        filename
            path of the HDF5 file
        group
            name of the dataset group within the file
        create_if_needed
            create the file and the group if they do not exist. If False, both have to exist.

        Raises
        ------
        OpenFailedError
            if the file can not be opened or the group does not exist
        """
        self.filename = Path(filename)
        self.group_name = group
        try:
            self._file: h5py.File | None = h5py.File(self.filename, 'a' if create_if_needed else 'r+')
        except OSError as e:
            raise OpenFailedError(f'Could not open {self.filename} for writing: {e}') from e
        try:
            if create_if_needed:
                self._group = self._file.require_group(group)
            elif group in self._file:
                self._group = self._file[group]
            else:
                raise OpenFailedError(f'Group {group} does not exist in {self.filename}.')
        except OpenFailedError:
            self.close()
            raise
        except (OSError, TypeError) as e:
            self.close()
            raise OpenFailedError(f'Could not open group {group} in {self.filename}: {e}') from e
        logger.debug('Opened dataset {}:/{}', self.filename, group)

    @property
    def group(self) -> h5py.Group:
        """HDF5 group of the dataset."""
        if self._file is None:
            raise DatasetClosedError(f'Dataset {self.filename}:/{self.group_name} is closed.')
        return self._group

    @property
    def closed(self) -> bool:
        """Whether the dataset has been closed."""
        return self._file is None

    def close(self) -> None:
        """Flush and close the file. Closing a closed dataset does nothing."""
        if self._file is not None:
            self._file.flush()
            self._file.close()
            self._file = None
            logger.debug('Closed dataset {}:/{}', self.filename, self.group_name)

    def __enter__(self) -> Self:
        """Enter the runtime context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Close the dataset on leaving the runtime context."""
        self.close()

    def __repr__(self) -> str:
        """Representation method for Dataset class."""
        state = 'closed' if self.closed else 'open'
        return f'{type(self).__name__}({str(self.filename)!r}, {self.group_name!r}, {state})'

    # Arrays

    def append_array(self, name: str, array: NDArray) -> None:
        """Append an array to the array stack `name`.

        A new stack of shape `(1, ..., d1, d0)` is created if `name` does not exist. Otherwise the stack grows by one
        along its first dimension.

        Parameters
        ----------
        name
            name of the array stack
        array
            array to append

        Raises
        ------
        SchemaMismatchError
            if the dimensions or the element type differ from the arrays already stored under `name`
        WriteFailedError
            if the storage layer fails
        """
        if name in (ACQUISITIONS_PATH, HEADER_PATH):
            raise ValueError(f'{name} is reserved and can not be used as an array name.')
        values = array.numpy()
        element_type = array.element_type
        try:
            if name not in self.group:
                stack = self.group.create_dataset(
                    name,
                    data=values[np.newaxis],
                    maxshape=(None, *values.shape),
                    chunks=(1, *values.shape),
                )
                stack.attrs[ELEMENT_TYPE_ATTRIBUTE] = element_type.value
            else:
                stack = self._array_stack(name)
                stored_type = self._stored_element_type(stack)
                if stack.shape[1:] != values.shape or stored_type != element_type:
                    raise SchemaMismatchError(
                        f'Can not append array with dimensions {array.dims} and element type {element_type.value} '
                        f'to {name} with dimensions {tuple(reversed(stack.shape[1:]))} and element type '
                        f'{stored_type.value}.'
                    )
                depth = stack.shape[0]
                stack.resize(depth + 1, axis=0)
                stack[depth] = values
        except OSError as e:
            raise WriteFailedError(f'Could not write array {name}: {e}') from e
        logger.debug('Appended array {} to {}', array, name)

    def read_array(self, name: str, index: int = 0, element_type: ElementType | None = None) -> NDArray:
        """Read an array from the array stack `name`.

        Parameters
        ----------
        name
            name of the array stack
        index
            position in the stack
        element_type
            expected element type. If None, the stored element type is used.

        Raises
        ------
        NotFoundError
            if `name` does not exist
        OutOfRangeError
            if `index` is not in `[0, number_of_arrays(name))`
        TypeMismatchError
            if `element_type` differs from the stored element type
        """
        stack = self._array_stack(name)
        stored_type = self._stored_element_type(stack)
        if element_type is not None and element_type != stored_type:
            raise TypeMismatchError(f'{name} holds {stored_type.value} elements, not {element_type.value}.')
        depth = stack.shape[0]
        if not 0 <= index < depth:
            raise OutOfRangeError(f'Index {index} is out of range for {name} with {depth} arrays.')
        values = np.ascontiguousarray(stack[index], dtype=stored_type.numpy_dtype)
        return NDArray(torch.from_numpy(values))

    def number_of_arrays(self, name: str) -> int:
        """Number of arrays in the stack `name`."""
        return self._array_stack(name).shape[0]

    def array_names(self) -> list[str]:
        """Names of all array stacks."""
        return [
            name
            for name, item in self.group.items()
            if isinstance(item, h5py.Dataset) and name not in (ACQUISITIONS_PATH, HEADER_PATH)
        ]

    def _array_stack(self, name: str) -> h5py.Dataset:
        if name in (ACQUISITIONS_PATH, HEADER_PATH) or name not in self.group:
            raise NotFoundError(f'Array {name} does not exist in {self.filename}:/{self.group_name}.')
        stack = self.group[name]
        if not isinstance(stack, h5py.Dataset):
            raise NotFoundError(f'{name} in {self.filename}:/{self.group_name} is not an array.')
        return stack

    @staticmethod
    def _stored_element_type(stack: h5py.Dataset) -> ElementType:
        if ELEMENT_TYPE_ATTRIBUTE in stack.attrs:
            return ElementType(stack.attrs[ELEMENT_TYPE_ATTRIBUTE])
        return ElementType.from_dtype(stack.dtype)

    # Acquisitions

    def append_acquisition(self, acquisition: Acquisition) -> None:
        """Append an acquisition to the end of the acquisition stream.

        Raises
        ------
        ShapeMismatchError
            if the length of the data or trajectory does not match the header
        InvalidAcquisitionError
            if the header is invalid
        WriteFailedError
            if the storage layer fails
        """
        acquisition.validate()
        table = self._acquisition_table(create=True)
        n = table.shape[0]
        try:
            table.resize(n + 1, axis=0)
            table[n : n + 1] = acquisition.to_record()
        except OSError as e:
            raise WriteFailedError(f'Could not write acquisition {n}: {e}') from e

    def read_acquisition(self, index: int) -> Acquisition:
        """Read the acquisition at position `index` of the acquisition stream.

        Raises
        ------
        OutOfRangeError
            if `index` is not in `[0, number_of_acquisitions())`
        """
        n = self.number_of_acquisitions()
        if not 0 <= index < n:
            raise OutOfRangeError(f'Index {index} is out of range for {n} acquisitions.')
        # conversion by member name, so files of other ISMRMRD writers are read correctly
        record = np.zeros(1, dtype=ACQUISITION_DTYPE)
        self._acquisition_table().read_direct(record, np.s_[index : index + 1])
        return Acquisition.from_record(record)

    def number_of_acquisitions(self) -> int:
        """Number of acquisitions in the acquisition stream."""
        if ACQUISITIONS_PATH not in self.group:
            return 0
        return self._acquisition_table().shape[0]

    def acquisitions(self) -> Iterator[Acquisition]:
        """Iterate over the acquisition stream in order of appending."""
        for index in range(self.number_of_acquisitions()):
            yield self.read_acquisition(index)

    def _acquisition_table(self, create: bool = False) -> h5py.Dataset:
        if ACQUISITIONS_PATH not in self.group:
            if not create:
                raise NotFoundError(f'No acquisitions in {self.filename}:/{self.group_name}.')
            try:
                return self.group.create_dataset(
                    ACQUISITIONS_PATH,
                    shape=(0,),
                    maxshape=(None,),
                    dtype=ACQUISITION_DTYPE,
                    chunks=(_ACQUISITION_CHUNK_SIZE,),
                )
            except OSError as e:
                raise WriteFailedError(f'Could not create the acquisition stream: {e}') from e
        table = self.group[ACQUISITIONS_PATH]
        if not isinstance(table, h5py.Dataset):
            raise SchemaMismatchError(
                f'{self.filename}:/{self.group_name}/{ACQUISITIONS_PATH} is not an acquisition table.'
            )
        return table

    # Header

    def write_header(self, header: str | MrrdHeader) -> None:
        """Write the XML header, replacing an existing header.

        Parameters
        ----------
        header
            XML text or header, which is serialized to XML
        """
        xml = header.to_xml() if isinstance(header, MrrdHeader) else header
        try:
            if HEADER_PATH in self.group:
                logger.debug('Replacing XML header of {}:/{}', self.filename, self.group_name)
                del self.group[HEADER_PATH]
            self.group.create_dataset(HEADER_PATH, data=[xml], dtype=h5py.string_dtype('utf-8'))
        except OSError as e:
            raise WriteFailedError(f'Could not write the XML header: {e}') from e

    def read_header(self) -> str:
        """Read the XML header.

        Raises
        ------
        NotFoundError
            if no header has been written
        """
        if HEADER_PATH not in self.group:
            raise NotFoundError(f'No XML header in {self.filename}:/{self.group_name}.')
        return self.group[HEADER_PATH].asstr()[0]
