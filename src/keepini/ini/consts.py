# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/09/22 16:55:30
# @Author : Kariko Lin

from enum import Enum


class DanglingTextOption(str, Enum):
    """小节顶部非注释文本（游离文本）的处理方式。"""
    Keep = 'keep'  # stored as `IniSection.dangling_text`.
    ToComment = 'to_comment'  # as ONE comment line, '\n' kept inside.
    Drop = 'drop'


DEFAULT_COMMENT_PREFIXES = (';', '#')
