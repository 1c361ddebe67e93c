import pytest


@pytest.fixture
def p3_example():
    return b"P3\n# comment\n2 1\n255\n255 0 0 0 255 0"


@pytest.fixture
def p6_2x2():
    return b"P6\n2 2\n255\n" + bytes(range(12))


@pytest.fixture
def ppm_file(tmp_path):
    def write(data: bytes, name: str = "img.ppm"):
        p = tmp_path / name
        p.write_bytes(data)
        return str(p)

    return write
