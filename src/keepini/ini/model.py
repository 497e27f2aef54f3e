# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/09/23 10:18:54
# @Author : Kariko Lin

"""
Basically INI Structure with comments (and their positions) kept.

As for reading and writing text, just see `ini.parser`.
"""

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from itertools import chain
from typing import TYPE_CHECKING, Any
from warnings import warn

if TYPE_CHECKING:
    from .chain import IniChainAccessor


class AccessValueError(Exception):
    """按键访问失败时抛出：键不存在、类型转换失败，或小节不存在。"""
    pass


def _not_none(obj: object, name: str) -> None:
    if obj is None:
        raise TypeError(f'{name} must not be None')


def _filter_none(contents: Iterable[str | None]) -> list[str]:
    return [i for i in contents if i is not None]


@dataclass(kw_only=True)
class IniEntry:
    """One key's value, with comment lines right after it.

    There's no "comments before" here: those belong to the previous
    entry (or the section top), so one comment never counts twice.
    """
    value: str
    # None stands for "no comments". never keep an empty list.
    comments: list[str] | None = None

    def append_comments(self, comments: list[str]) -> None:
        if not comments:
            return
        if self.comments is None:
            self.comments = list(comments)
        else:
            self.comments.extend(comments)

    def remove_comments(self) -> None:
        self.comments = None


class IniSection(MutableMapping[str, str]):
    """INI 小节。

    按*首次写入*的顺序维护键值对，同时记录：
    - 每个键之后的注释（直到下一个键为止）；
    - 第一个键之前的注释（`top_comments`）；
    - 小节顶部既不是注释、也不是键值对的游离文本（`dangling_text`）。

    所有键值对均*应该*是`str: str`类型，写入时会对值调用`str()`，
    但键、值都不能是`None`。

    另注：游离文本不遵守注释格式，写回文件后可能导致别的程序读不懂，请谨慎使用。
    """

    def __init__(self, pairs_to_import: Mapping[str, str] | None = None):
        # one ordered dict keeps both the key index and the entry order.
        self.__entries: dict[str, IniEntry] = {}
        self.__top_comments: list[str] | None = None
        self.dangling_text: str | None = None
        if pairs_to_import:
            self.update(pairs_to_import)

    def __getitem__(self, key: str) -> str:
        _not_none(key, 'key')
        return self.__entries[key].value

    def __setitem__(self, key: str, value: Any) -> None:
        _not_none(key, 'key')
        _not_none(value, 'value')
        if (entry := self.__entries.get(key)) is None:
            self.__entries[key] = IniEntry(value=str(value))
        else:
            # overwrite in place: position and comments stay.
            entry.value = str(value)

    def __delitem__(self, key: str) -> None:
        _not_none(key, 'key')
        if key not in self.__entries:
            raise KeyError(key)
        prev = self.__before(key)
        entry = self.__entries.pop(key)
        # comments of the removed entry move up instead of vanishing.
        if prev is None:
            self.__append_top(entry.comments)
        else:
            prev.append_comments(entry.comments or [])

    def __contains__(self, key: object) -> bool:
        _not_none(key, 'key')
        return key in self.__entries

    def __len__(self) -> int:
        return len(self.__entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniSection):
            return NotImplemented
        if other is self:
            return True
        return (
            list(self.__entries.items()) == list(other.__entries.items())
            and self.__top_comments == other.__top_comments
            and self.dangling_text == other.dangling_text)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return 'IniSection { .keys = %d, .comments = %d }' % (
            len(self), len(self.comments))

    def __deepcopy__(self, memo: dict[int, Any]) -> 'IniSection':
        return self.deepclone()

    def set(self, key: str, value: Any) -> None:
        """添加键值对；若键已存在则原位覆盖，顺序和注释都不变。"""
        self[key] = value

    def remove(self, key: str) -> bool:
        """删除键值对，其后的注释并入前一个键（或小节顶部）。

        Returns:
            `True` if removed, `False` if `key` is not found.
        """
        if key not in self:
            return False
        del self[key]
        return True

    def rename(self, key: str, new_key: str) -> bool:
        """Rename a key, keeping its position and comments.

        Returns:
            `True` if succeed, otherwise `False`.
            May not success if `key` is not found, `key == new_key`,
            or `new_key` already exists (which also warns).
        """
        _not_none(key, 'key')
        _not_none(new_key, 'new_key')
        if key == new_key or key not in self.__entries:
            return False
        if new_key in self.__entries:
            warn(f'小节中已存在键 "{new_key}"，放弃将 "{key}" 重命名，以免覆盖。')
            return False

        keys, entries = list(self.__entries.keys()), list(self.__entries.values())
        keys[keys.index(key)] = new_key
        self.__entries = dict(zip(keys, entries))
        return True

    def clear(self) -> None:
        self.__entries.clear()
        self.__top_comments = None
        self.dangling_text = None

    # region comments

    @property
    def top_comments(self) -> tuple[str, ...]:
        """第一个键之前的注释（没有键时即为全部注释）。"""
        return tuple(self.__top_comments or ())

    @property
    def comments(self) -> tuple[str, ...]:
        """按顺序排列的*全部*注释：先是顶部注释，再是各键之后的注释。"""
        return tuple(chain(
            self.__top_comments or (),
            *(i.comments or () for i in self.__entries.values())))

    @property
    def key_and_comment_count(self) -> int:
        return len(self.__top_comments or ()) + sum(
            1 + len(i.comments or ()) for i in self.__entries.values())

    def add_comments(self, *contents: str | None) -> None:
        """在小节末尾追加注释（即最后一个键之后；没有键时则追加到顶部注释）。

        `contents`中的`None`会被忽略。
        """
        filtered = _filter_none(contents)
        if not filtered:
            return
        if not self.__entries:
            self.__append_top(filtered)
        else:
            next(reversed(self.__entries.values())).append_comments(filtered)

    def comments_before(self, key: str) -> tuple[str, ...]:
        if (prev := self.__before(key)) is None:
            return self.top_comments
        return tuple(prev.comments or ())

    def add_comments_before(self, key: str, *contents: str | None) -> None:
        prev = self.__before(key)
        filtered = _filter_none(contents)
        if prev is None:
            self.__append_top(filtered)
        else:
            prev.append_comments(filtered)

    def remove_comments_before(self, key: str) -> None:
        if (prev := self.__before(key)) is None:
            self.__top_comments = None
        else:
            prev.remove_comments()

    def comments_after(self, key: str) -> tuple[str, ...]:
        return tuple(self.__entries[self.__checked(key)].comments or ())

    def add_comments_after(self, key: str, *contents: str | None) -> None:
        self.__entries[self.__checked(key)].append_comments(
            _filter_none(contents))

    def remove_comments_after(self, key: str) -> None:
        self.__entries[self.__checked(key)].remove_comments()

    def remove_comments(self) -> None:
        """清空所有注释，键值对和游离文本保持不变。"""
        self.__top_comments = None
        for i in self.__entries.values():
            i.remove_comments()

    # endregion

    # lazy to implement auto converter. just manual.
    def getint(self, key: str) -> int:
        value = self.get(key)
        try:
            return int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError) as e:
            raise AccessValueError(
                f'Unable to parse value of key "{key}" to int') from e

    def getbool(self, key: str) -> bool:
        value = self.get(key)
        return value is not None and value.lower() == 'true'

    def getlist(self, key: str, sep: str = ',') -> tuple[str, ...]:
        return () if key not in self else tuple(self[key].split(sep))

    def to_dict(self) -> dict[str, str]:
        return {k: v.value for k, v in self.__entries.items()}

    def entries(self) -> Iterator[tuple[str, str, tuple[str, ...]]]:
        """Walk `(key, value, comments after key)` in order."""
        for k, v in self.__entries.items():
            yield k, v.value, tuple(v.comments or ())

    def deepclone(self) -> 'IniSection':
        ret = IniSection()
        ret.__entries = {
            k: IniEntry(value=v.value, comments=(
                None if v.comments is None else list(v.comments)))
            for k, v in self.__entries.items()
        }
        ret.__append_top(self.__top_comments)
        ret.dangling_text = self.dangling_text
        return ret

    def __before(self, key: str) -> IniEntry | None:
        """The entry right before `key`, `None` if `key` comes first."""
        _not_none(key, 'key')
        prev = None
        for k, v in self.__entries.items():
            if k == key:
                return prev
            prev = v
        raise AccessValueError(f'Key "{key}" not found')

    def __checked(self, key: str) -> str:
        _not_none(key, 'key')
        if key not in self.__entries:
            raise AccessValueError(f'Key "{key}" not found')
        return key

    def __append_top(self, comments: list[str] | None) -> None:
        if not comments:
            return
        if self.__top_comments is None:
            self.__top_comments = list(comments)
        else:
            self.__top_comments.extend(comments)


class IniDocument(MutableMapping[str, IniSection]):
    """INI 文件表示。

        ```ini
        ; 文件开头、不属于任何小节的内容，使用 self.header 访问。
        key = val

        [section]
        ; 注释会跟着它后面的键（准确说，是前一个键）走。
        key233 = val666
        ```

    小节按*首次出现*的顺序排列，重命名不改变位置。
    比较两个文档时只看内容，不看小节顺序。
    """

    def __init__(self) -> None:
        self.__sections: dict[str, IniSection] = {}
        # still keep this header to
        # maintain pairs not belong to any section.
        self.__header = IniSection()

    @property
    def header(self) -> IniSection:
        """位于文件头部的，不属于任何小节的内容。始终存在，只能清空。"""
        return self.__header

    def __getitem__(self, name: str) -> IniSection:
        _not_none(name, 'name')
        return self.__sections[name]

    def __setitem__(
        self,
        name: str,
        value: IniSection | Mapping[str, str]
    ) -> None:
        _not_none(name, 'name')
        _not_none(value, 'value')
        # shouldn't keep ptr to external section in key setting operation.
        self.__sections[name] = (
            value.deepclone()
            if isinstance(value, IniSection)
            else IniSection(value)
        )

    def __delitem__(self, name: str) -> None:
        _not_none(name, 'name')
        del self.__sections[name]

    def __contains__(self, name: object) -> bool:
        _not_none(name, 'name')
        return name in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IniDocument):
            return NotImplemented
        if other is self:
            return True
        # plain dict comparison ignores order, which is what we want.
        return (self.__header == other.__header
                and self.__sections == other.__sections)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return 'IniDocument { .sections = %s }' % list(self.__sections)

    def __deepcopy__(self, memo: dict[int, Any]) -> 'IniDocument':
        return self.deepclone()

    def setdefault(
        self,
        name: str,
        default: IniSection | Mapping[str, str] | None = None
    ) -> IniSection:
        """If `name` not in self, then add it (at the end); returns the
        section registered under `name` either way."""
        _not_none(name, 'name')
        if name not in self.__sections:
            if default is None:
                self.__sections[name] = IniSection()
            else:
                self[name] = default
        return self.__sections[name]

    def remove(self, name: str) -> bool:
        if name not in self:
            return False
        del self[name]
        return True

    def rename(self, old: str, new: str) -> bool:
        """Rename a section.

        Args:
            old: The section name to be replaced.
            new: Name to apply.

        Returns:
            `True` if succeed, otherwise `False`.
            May not success if `old` is not found, `old == new`,
            or `new` already exists (which also warns).
        """
        _not_none(old, 'old')
        _not_none(new, 'new')
        if old == new or old not in self.__sections:
            return False
        if new in self.__sections:
            warn(f'文档中已存在小节 [{new}]，放弃将 [{old}] 重命名，以免覆盖。')
            return False

        sections, datas = list(self.keys()), list(self.values())
        sections[sections.index(old)] = new
        self.__sections = dict(zip(sections, datas))
        return True

    def clear(self, including_header: bool = True) -> None:
        """清空文档。`including_header=False`时保留文件头部内容。"""
        if including_header:
            self.__header.clear()
        for i in self.__sections.values():
            i.clear()
        self.__sections.clear()

    def getvalue(
        self, name: str, key: str, default: str | None = None
    ) -> str | None:
        """Look a value up without creating the section."""
        _not_none(key, 'key')
        section = self.get(name)
        return default if section is None else section.get(key, default)

    def setvalue(self, name: str, key: str, value: Any) -> None:
        self.setdefault(name).set(key, value)

    def hasvalue(self, name: str, key: str) -> bool:
        _not_none(key, 'key')
        section = self.get(name)
        return section is not None and key in section

    def getint(self, name: str, key: str) -> int:
        return self.__existing(name).getint(key)

    def getbool(self, name: str, key: str) -> bool:
        return self.__existing(name).getbool(key)

    def deepclone(self) -> 'IniDocument':
        ret = IniDocument()
        ret.__header = self.__header.deepclone()
        for k, v in self.__sections.items():
            ret.__sections[k] = v.deepclone()
        return ret

    def chain(self) -> 'IniChainAccessor':
        """链式访问本文档。"""
        from .chain import IniChainAccessor
        return IniChainAccessor(self)

    def __existing(self, name: str) -> IniSection:
        if (section := self.get(name)) is None:
            raise AccessValueError(f'Section [{name}] not found')
        return section
