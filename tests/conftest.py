import pytest

NORMAL = (
    "[Sec1]\n"
    "; Comment before key1\n"
    "; and Value1\n"
    "key1 = value1\n"
    "; Comment before key2\n"
    "; and Value2\n"
    "key2 = value2\n"
    "key3 = value3\n"
    "[Sec2]\n"
    "key4 = value4\n"
    "key5 = value5\n"
)

ABNORMAL = (
    "untitled-key1 = untitled-value1\n"
    "; Comment before untitled key2\n"
    "and Value2\n"
    "untitled key 2 = untitled value 2\n"
    "[Sec1]\n"
    "  Dangling Content In Sec1\n"
    "\n"
    "  Next dangling line\n"
    "; Comment1 before key1\n"
    ";    Comment2 before key1\n"
    "key1 = value1\n"
    "key2 = value2\n"
    "    value2 next line\n"
    "    ; Comment before key3\n"
    "key3  =  value3\n"
    "[Sec2]\n"
    "  [  Sec3 ]\n"
    "\n"
    "key4  =  value4\n"
    "\n"
    "key5 = value5\n"
)

TOP_DANGLING = (
    "[Sec1]\n"
    "  Dangling Content In Sec1\n"
    "\n"
    "  Next dangling line\n"
    "; Comment1 before key1\n"
    "key1 = value1\n"
    "key2 = value2\n"
    "[Sec2]\n"
)

DANGLING_TEXT = "  Dangling Content In Sec1\n\n  Next dangling line"


@pytest.fixture
def normal_text():
    return NORMAL


@pytest.fixture
def abnormal_text():
    return ABNORMAL


@pytest.fixture
def top_dangling_text():
    return TOP_DANGLING


@pytest.fixture
def dangling_text():
    return DANGLING_TEXT
