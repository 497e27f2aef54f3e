# -*- encoding: utf-8 -*-
# @File   : chain.py
# @Time   : 2026/10/02 19:33:05
# @Author : Kariko Lin

"""Chained access, for building documents in one expression:

    ```python
    doc.chain() \\
        .open_section('General') \\
        .add_comment('generated') \\
        .set('Name', 'keepini') \\
        .close_section() \\
        .rename_section('General', 'Basic')
    ```
"""

from typing import Any

from .model import IniDocument, IniSection


class IniChainAccessor:
    def __init__(self, instance: IniDocument) -> None:
        self._ini = instance

    def rename_section(self, old: str, new: str) -> 'IniChainAccessor':
        self._ini.rename(old, new)
        return self

    def remove_section(self, name: str) -> 'IniChainAccessor':
        self._ini.remove(name)
        return self

    def open_section(self, name: str) -> 'SectionChainAccessor':
        """打开指定小节，不存在则新建。"""
        return SectionChainAccessor(self, self._ini.setdefault(name))

    def open_header(self) -> 'SectionChainAccessor':
        """打开文件头部那个没有名字的小节。"""
        return SectionChainAccessor(self, self._ini.header)


class SectionChainAccessor:
    def __init__(self, parent: IniChainAccessor, section: IniSection):
        self._parent = parent
        self._section = section

    def set(self, key: str, value: Any) -> 'SectionChainAccessor':
        self._section.set(key, value)
        return self

    def rename(self, key: str, new_key: str) -> 'SectionChainAccessor':
        self._section.rename(key, new_key)
        return self

    def remove(self, key: str) -> 'SectionChainAccessor':
        self._section.remove(key)
        return self

    def add_comment(self, comment: str) -> 'SectionChainAccessor':
        self._section.add_comments(comment)
        return self

    def close_section(self) -> IniChainAccessor:
        return self._parent
