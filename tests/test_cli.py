import pytest

from shortcode.__main__ import main


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> list[str]:
    assert main(list(argv)) == 0
    return capsys.readouterr().out.splitlines()


def test_generate_every_code(capsys: pytest.CaptureFixture[str]):
    codes = _run(
        capsys, "--alphabet-size", "26", "--length", "2", "--count", "676", "--seed", "1"
    )
    assert len(codes) == 676
    assert len(set(codes)) == 676
    assert all(len(code) == 2 for code in codes)
    # first 26 characters of the full alphabet
    assert set("".join(codes)) == set("0123456789abcdefghijklmnop")


def test_partitions_print_the_same_codes(capsys: pytest.CaptureFixture[str]):
    args = ("--preset", "numeric", "--length", "2", "--count", "150", "--seed", "5")
    plain = _run(capsys, *args)
    partitioned = _run(capsys, *args, "--partitions", "4")
    assert partitioned == plain
    assert len(plain[-1]) == 3


def test_exhausted(capsys: pytest.CaptureFixture[str]):
    assert main(["-p", "numeric", "-l", "1", "-n", "11", "--strategy", "panic"]) == 1
    assert "have been issued" in capsys.readouterr().err


@pytest.mark.parametrize(
    "argv",
    [
        ["--alphabet-size", "0"],
        ["--alphabet-size", "63"],
        ["--length", "0"],
        ["--partitions", "0"],
        ["--preset", "alphanumeric", "--length", "11"],
        ["--preset", "klingon"],
    ],
)
def test_bad_arguments(argv: list[str]):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    assert exc_info.value.code == 2
