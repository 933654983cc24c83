"""Audio quality tier classification."""

from __future__ import annotations

QUALITY_SQ = "SQ"
QUALITY_HQ = "HQ"
QUALITY_HI_RES = "Hi-Res"

HI_RES_SAMPLE_RATE = 96_000
HQ_SAMPLE_RATE = 44_100
CD_BIT_DEPTH = 16


def classify_quality(sample_rate: int | None, bits_per_sample: int | None) -> str:
    """Map sample rate (Hz) and bit depth to ``SQ``, ``HQ`` or ``Hi-Res``.

    Bit depth above CD quality is Hi-Res regardless of sample rate. Unknown
    values count as zero, so ``(0, 0)`` is ``SQ``.
    """
    rate = sample_rate or 0
    depth = bits_per_sample or 0
    if rate >= HI_RES_SAMPLE_RATE or depth > CD_BIT_DEPTH:
        return QUALITY_HI_RES
    if rate >= HQ_SAMPLE_RATE:
        return QUALITY_HQ
    return QUALITY_SQ
