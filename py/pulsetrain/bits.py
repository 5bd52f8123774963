"""Pulse train element bit layout.

Each element of the pulse train is a bit field holding the signal levels at
one angle of the engine cycle:

    bit 0       camshaft
    bit 1       crankshaft
    bit 2..7    TDC cylinder 0..5

The layout is the same for every word width; wider words only leave more
unused high bits.
"""
import numpy as np

from pulsetrain.errors import UnsupportedWordWidth
from pulsetrain.model import Level
from pulsetrain.util import CYCLE_ANGLE

MAX_CYLINDERS = 6


class EngBit:
    CAM_MSK = 0x01
    CRK_MSK = 0x02
    TDC_MSK = (0x04, 0x08, 0x10, 0x20, 0x40, 0x80)

    DTYPE = None

    @classmethod
    def width(cls):
        return np.dtype(cls.DTYPE).itemsize * 8

    @staticmethod
    def _set(value, mask, lvl):
        if lvl == Level.HIGH:
            return value | mask
        return value & ~mask

    @staticmethod
    def _get(value, mask):
        return Level.HIGH if value & mask != 0 else Level.LOW

    @classmethod
    def _tdc_mask(cls, cyl):
        if not 0 <= cyl < MAX_CYLINDERS:
            raise IndexError(f"TDC index {cyl} outside of [0, {MAX_CYLINDERS - 1}]")
        return cls.TDC_MSK[cyl]

    @classmethod
    def set_cam(cls, value, lvl):
        return cls._set(int(value), cls.CAM_MSK, lvl)

    @classmethod
    def get_cam(cls, value):
        return cls._get(int(value), cls.CAM_MSK)

    @classmethod
    def set_crk(cls, value, lvl):
        return cls._set(int(value), cls.CRK_MSK, lvl)

    @classmethod
    def get_crk(cls, value):
        return cls._get(int(value), cls.CRK_MSK)

    @classmethod
    def set_tdc(cls, value, cyl, lvl):
        return cls._set(int(value), cls._tdc_mask(cyl), lvl)

    @classmethod
    def get_tdc(cls, value, cyl):
        return cls._get(int(value), cls._tdc_mask(cyl))

    @classmethod
    def tdc_bits(cls):
        mask = 0
        for m in cls.TDC_MSK:
            mask |= m
        return mask


class U8Word(EngBit):
    DTYPE = np.uint8


class U16Word(EngBit):
    DTYPE = np.uint16


class U32Word(EngBit):
    DTYPE = np.uint32


WORDS = {w.width(): w for w in (U8Word, U16Word, U32Word)}


def word_for_width(width):
    try:
        return WORDS[int(width)]
    except (KeyError, ValueError):
        raise UnsupportedWordWidth(
            f"Word width {width} not supported, expected one of {sorted(WORDS)}"
        )


def word_for_dtype(dtype):
    dtype = np.dtype(dtype)
    if dtype.kind != "u":
        raise UnsupportedWordWidth(f"Pulse train elements must be unsigned, got {dtype}")
    return word_for_width(dtype.itemsize * 8)


def word_for_buffer(buffer):
    dtype = getattr(buffer, "dtype", None)
    if dtype is None:
        raise UnsupportedWordWidth(
            f"Cannot infer word width of a {type(buffer).__name__}, pass the word explicitly"
        )
    return word_for_dtype(dtype)


def new_buffer(word=U8Word):
    return np.zeros(CYCLE_ANGLE, dtype=word.DTYPE)
