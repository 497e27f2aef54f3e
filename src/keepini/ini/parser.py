# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/09/26 23:12:48
# @Author : Kariko Lin

"""Text side of INI: `IniDeserializer` turns lines into `IniDocument`,
`IniSerializer` does the reverse, and `IniFile` binds them to a path.

The two directions agree on the same layout:

    [section]           ; header, between the first '[' and the last ']'
    ; comment           ; ';' or '#' after optional blanks
    key = value         ; split on the first '='
      continuation      ; anything else, glued to the previous line

so text read and written with matching options comes back unchanged.
Malformed text never raises: it degrades into dangling text
or continuation lines. Only IO (and codec) failures raise `ReadWriteError`.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from io import StringIO, TextIOBase, TextIOWrapper
from typing import BinaryIO

import chardet

from ..abstract import FileHandler
from .consts import DEFAULT_COMMENT_PREFIXES, DanglingTextOption
from .model import IniDocument, IniSection, _not_none

logger = logging.getLogger(__name__)


class ReadWriteError(Exception):
    """To record IO errors when reading or writing INI text."""
    pass


@dataclass
class _Pending:
    key: str | None  # None for comments.
    values: list[str] = field(default_factory=list)

    def joined(self) -> str:
        return '\n'.join(self.values)


def _chomp(line: str) -> str:
    if line.endswith('\n'):
        line = line[:-1]
    if line.endswith('\r'):
        line = line[:-1]
    return line


class IniDeserializer:
    """解析 INI 文本。

    所有选项都可以在构造后直接修改，但同一个实例不要同时用于多次读取。
    """

    def __init__(
        self, *,
        dangling_text_option: DanglingTextOption = DanglingTextOption.Keep,
        comment_prefixes: Iterable[str] = DEFAULT_COMMENT_PREFIXES,
        trim_section_name: bool = True,
        trim_key: bool = True,
        trim_value: bool = True,
        trim_comment: bool = True
    ) -> None:
        self.dangling_text_option = dangling_text_option
        self.comment_prefixes = comment_prefixes
        self.trim_section_name = trim_section_name
        self.trim_key = trim_key
        self.trim_value = trim_value
        self.trim_comment = trim_comment

    @property
    def comment_prefixes(self) -> tuple[str, ...]:
        """注释前缀。按*配置顺序*匹配，而不是按在行内出现的先后。"""
        return self._prefixes

    @comment_prefixes.setter
    def comment_prefixes(self, value: Iterable[str]) -> None:
        if isinstance(value, str):
            value = (value,)
        # dedupe but keep order; empty prefix would eat every line.
        prefixes = tuple(dict.fromkeys(i for i in value or () if i))
        if not prefixes:
            raise ValueError('Comment prefixes cannot be None or empty.')
        self._prefixes = prefixes

    def read(
        self, buf: Iterable[str], ins: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的字符串流（或者任何按行迭代的字符串序列）。

        若给出`ins`，则在其基础上继续读取（同名小节会合并）。
        """
        _not_none(buf, 'buf')
        if ins is None:
            ins = IniDocument()
        try:
            self._load(buf, ins)
        except OSError as e:
            raise ReadWriteError(
                'Error occurred when deserializing content') from e
        return ins

    def loads(self, text: str) -> IniDocument:
        _not_none(text, 'text')
        # newline=None: lone "\r" ends a line too, same as readbinary.
        return self.read(StringIO(text, newline=None))

    def readbinary(
        self, stream: BinaryIO, encoding: str = 'utf-8'
    ) -> IniDocument:
        """Decode and read a byte stream. The stream is left open."""
        _not_none(stream, 'stream')
        _not_none(encoding, 'encoding')
        try:
            buf = TextIOWrapper(stream, encoding=encoding, newline='')
        except LookupError as e:
            raise ReadWriteError('Unable to read from stream') from e
        try:
            return self.read(buf)
        except UnicodeDecodeError as e:
            raise ReadWriteError('Unable to read from stream') from e
        finally:
            buf.detach()

    def _load(self, lines: Iterable[str], ins: IniDocument) -> None:
        this_sect = ins.header
        # `head` only holds fragments seen before any comment or key,
        # those may become dangling text later.
        head: list[str] = []
        pending: list[_Pending] = []
        for i in lines:
            line = _chomp(i)
            if (parsed := self._parse_comment(line)) is not None:
                pending.append(_Pending(None, [parsed]))
            elif (parsed := self._parse_section_name(line)) is not None:
                self._flush(this_sect, head, pending)
                head, pending = [], []
                this_sect = ins.setdefault(parsed)
            elif '=' in line:
                key, val = line.split('=', 1)
                pending.append(_Pending(key, [val]))
            elif pending:
                pending[-1].values.append(line)
            else:
                head.append(line)
        self._flush(this_sect, head, pending)

    def _flush(
        self, sect: IniSection, head: list[str], pending: list[_Pending]
    ) -> None:
        if head:
            text = '\n'.join(head)
            match self.dangling_text_option:
                case DanglingTextOption.Keep:
                    sect.dangling_text = text
                case DanglingTextOption.ToComment:
                    sect.add_comments(text)
                case _:
                    logger.debug('Dropped %d dangling line(s).', len(head))

        for node in pending:
            value = node.joined()
            if node.key is None:
                sect.add_comments(value.strip() if self.trim_comment else value)
            else:
                sect.set(
                    node.key.strip() if self.trim_key else node.key,
                    value.strip() if self.trim_value else value)

    def _parse_comment(self, line: str) -> str | None:
        for prefix in self._prefixes:
            i = line.find(prefix)
            if i == 0 or (i > 0 and line[:i].isspace()):
                return line[i + len(prefix):]
        return None

    def _parse_section_name(self, line: str) -> str | None:
        beg = line.find('[')
        if beg == -1:
            return None
        end = line.rfind(']')
        if end < beg:
            return None
        name = line[beg + 1:end]
        return name.strip() if self.trim_section_name else name


class IniSerializer:
    """导出 INI 文本。与`IniDeserializer`一样，选项可在构造后修改。"""

    def __init__(
        self, *,
        comment_prefix: str = ';',
        line_separator: str = '\n',
        space_before_comment: bool = False,
        space_around_equalizer: bool = False
    ) -> None:
        self.comment_prefix = comment_prefix
        self.line_separator = line_separator
        # i.e. `; comment` instead of `;comment`.
        self.space_before_comment = space_before_comment
        # i.e. `key = value` instead of `key=value`.
        self.space_around_equalizer = space_around_equalizer

    @property
    def comment_prefix(self) -> str:
        return self._prefix

    @comment_prefix.setter
    def comment_prefix(self, value: str) -> None:
        _not_none(value, 'comment_prefix')
        self._prefix = value

    @property
    def line_separator(self) -> str:
        return self._sep

    @line_separator.setter
    def line_separator(self, value: str) -> None:
        _not_none(value, 'line_separator')
        self._sep = value

    def __output_section(self, section: IniSection) -> str:
        prefix = self._prefix + (' ' if self.space_before_comment else '')
        equalizer = ' = ' if self.space_around_equalizer else '='
        lines: list[str] = []
        if section.dangling_text is not None:
            lines.append(section.dangling_text)
        lines.extend(f'{prefix}{i}' for i in section.top_comments)
        for key, val, comments in section.entries():
            lines.append(f'{key}{equalizer}{val}')
            lines.extend(f'{prefix}{i}' for i in comments)
        return ''.join(f'{i}{self._sep}' for i in lines)

    def write(self, instance: IniDocument, buf: TextIOBase) -> None:
        """写出到字符串流。流由调用方负责关闭。"""
        _not_none(instance, 'instance')
        _not_none(buf, 'buf')
        try:
            buf.write(self.__output_section(instance.header))
            for name, section in instance.items():
                buf.write(f'[{name}]{self._sep}')
                buf.write(self.__output_section(section))
            buf.flush()
        except OSError as e:
            raise ReadWriteError(
                'Error occurred when serializing content') from e
        logger.debug('Wrote %d section(s).', len(instance))

    def dumps(self, instance: IniDocument) -> str:
        buf = StringIO()
        self.write(instance, buf)
        return buf.getvalue()

    def writebinary(
        self, instance: IniDocument, stream: BinaryIO,
        encoding: str = 'utf-8'
    ) -> None:
        """Encode and write to a byte stream. The stream is left open."""
        _not_none(stream, 'stream')
        _not_none(encoding, 'encoding')
        try:
            buf = TextIOWrapper(stream, encoding=encoding, newline='')
        except LookupError as e:
            raise ReadWriteError('Unable to write to stream') from e
        try:
            self.write(instance, buf)
        except UnicodeEncodeError as e:
            raise ReadWriteError('Unable to write to stream') from e
        finally:
            buf.detach()


class IniFile(FileHandler[IniDocument]):
    """按路径读写单个 INI 文件。

    读取时若指定的编码不对，会退回`chardet`猜测编码（最后兜底 GBK）。
    """

    def __init__(
        self, filename: str, encoding: str = 'utf-8', *,
        reader: IniDeserializer | None = None,
        writer: IniSerializer | None = None
    ) -> None:
        super().__init__(filename, encoding)
        self.reader = reader or IniDeserializer()
        self.writer = writer or IniSerializer()

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if not codec.get('encoding') or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except (UnicodeDecodeError, LookupError):
            buf = raw.decode('gbk')
        return StringIO(buf, newline=None)

    def __read(self) -> IniDocument:
        try:
            # when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.reader.read(fp)
        except UnicodeDecodeError:
            logger.warning(
                '`%s` is not %s encoded, guessing its charset instead.',
                self._fn, self._codec)
            return self.reader.read(self._decode_file(self._fn))

    def read(self) -> IniDocument:
        try:
            return self.__read()
        except (OSError, LookupError, UnicodeDecodeError) as e:
            raise ReadWriteError(f'Failed to load "{self._fn}"') from e

    def write(self, instance: IniDocument, *, pretty: bool = False) -> None:
        """保存到 INI 文件。

        `pretty=True`时在注释前、等号两侧加空格，其余格式沿用`self.writer`。
        """
        writer = self.writer if not pretty else IniSerializer(
            comment_prefix=self.writer.comment_prefix,
            line_separator=self.writer.line_separator,
            space_before_comment=True,
            space_around_equalizer=True)
        try:
            # newline='' so that `line_separator` is written as is.
            with open(self._fn, 'w', encoding=self._codec, newline='') as fp:
                writer.write(instance, fp)
        except (OSError, LookupError, UnicodeEncodeError) as e:
            raise ReadWriteError(f'Failed to save "{self._fn}"') from e

    def __str__(self) -> str:
        return 'INI file: ' + super().__str__()


def load(path: str, encoding: str = 'utf-8') -> IniDocument:
    return IniFile(path, encoding).read()


def save(
    instance: IniDocument, path: str, encoding: str = 'utf-8', *,
    pretty: bool = False
) -> None:
    IniFile(path, encoding).write(instance, pretty=pretty)
