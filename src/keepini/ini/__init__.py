# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/09/28 09:47:21
# @Author : Kariko Lin

from .consts import DanglingTextOption
from .model import AccessValueError, IniDocument, IniEntry, IniSection
from .parser import (
    IniDeserializer,
    IniFile,
    IniSerializer,
    ReadWriteError,
    load,
    save
)
from .chain import IniChainAccessor, SectionChainAccessor
