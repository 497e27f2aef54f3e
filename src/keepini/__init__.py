# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/09/20 22:41:37
# @Author : Chloride

import logging

from .ini import (
    AccessValueError,
    DanglingTextOption,
    IniDeserializer,
    IniDocument,
    IniFile,
    IniSection,
    IniSerializer,
    ReadWriteError,
    load,
    save
)

__all__ = [
    'IniDocument', 'IniSection', 'DanglingTextOption',
    'IniDeserializer', 'IniSerializer', 'IniFile', 'load', 'save',
    'AccessValueError', 'ReadWriteError'
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
