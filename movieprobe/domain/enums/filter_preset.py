from __future__ import annotations
from enum import StrEnum


class FilterPreset(StrEnum):
    """
    Named ffmpeg filter-graph snippets used by transcoders consuming a Movie.
    """
    # keep width/height divisible by 2
    PADDING = "pad=ceil(iw/2)*2:ceil(ih/2)*2"
    # apply DAR, square pixels, even dimensions
    DAR = "scale=trunc(ceil((ih*dar)/2)*2):ceil(ih/2)*2, setsar=1/1"
    BT709_DAR = (
        "scale=trunc(ceil((ih*dar)/2)*2):ceil(ih/2)*2, setsar=1/1, "
        "setparams=color_primaries=bt709:color_trc=bt709:colorspace=bt709"
    )
    # HDR -> SDR tone mapping
    HDR_TO_SDR = (
        "zscale=t=linear:npl=170, format=gbrpf32le, zscale=p=bt709, "
        "tonemap=tonemap=hable:desat=0, zscale=t=bt709:m=bt709:r=tv, format=yuv420p"
    )
    BT709_HDR_TO_SDR = "colorspace=all=bt709:iall=bt2020"
