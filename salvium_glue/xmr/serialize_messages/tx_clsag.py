#!/usr/bin/env python
# -*- coding: utf-8 -*-
# Author: Dusan Klinec, ph4r05, 2018

from monero_serialize.core.message_types import MessageType
from monero_serialize.xmrtypes import ECKey, KeyV


class Clsag(MessageType):
    """
    CLSAG signature, all fields hold 32B encodings.
    D is the commitment image divided by 8.
    """

    __slots__ = ["s", "c1", "I", "D"]
    MFIELDS = [("s", KeyV), ("c1", ECKey), ("I", ECKey), ("D", ECKey)]


class Tclsag(MessageType):
    """
    Twin CLSAG, two response streams sx (G) and sy (T)
    """

    __slots__ = ["sx", "sy", "c1", "I", "D"]
    MFIELDS = [
        ("sx", KeyV),
        ("sy", KeyV),
        ("c1", ECKey),
        ("I", ECKey),
        ("D", ECKey),
    ]
