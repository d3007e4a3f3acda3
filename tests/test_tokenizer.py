"""Tests for shell word splitting of compiler commands."""

import pytest

from ninja_compdb.errors import TokenizeError
from ninja_compdb.tokenizer import split_command


@pytest.mark.base_functionality
class TestSplitCommand:

    def test_simple_command(self):
        assert split_command("toolchain/bin/clang -I inc") == ["toolchain/bin/clang", "-I", "inc"]

    def test_sample_toolchain_command(self):
        command = "vendor/qcom/proprietary/llvm-arm-toolchain-ship/14/bin/clang -I system/media/audio/include"
        assert split_command(command) == [
            "vendor/qcom/proprietary/llvm-arm-toolchain-ship/14/bin/clang",
            "-I",
            "system/media/audio/include",
        ]

    @pytest.mark.parametrize("words", [
        ["clang"],
        ["clang", "-c", "a.c"],
        ["clang++", "-O2", "-Wall", "-Iinclude", "-o", "out.o", "-c", "src/main.cpp"],
    ])
    def test_unquoted_words(self, words):
        assert split_command(" ".join(words)) == words

    def test_repeated_whitespace(self):
        assert split_command("  clang \t -c   a.c  ") == ["clang", "-c", "a.c"]

    def test_double_quoted_group(self):
        assert split_command('clang -DMSG="hello world" a.c') == ["clang", "-DMSG=hello world", "a.c"]

    def test_single_quoted_group(self):
        assert split_command("clang '-DMSG=a b' a.c") == ["clang", "-DMSG=a b", "a.c"]

    def test_escaped_quotes(self):
        assert split_command('clang -DNAME=\\"x\\" a.c') == ["clang", '-DNAME="x"', "a.c"]

    def test_escaped_space(self):
        assert split_command("clang -I my\\ dir a.c") == ["clang", "-I", "my dir", "a.c"]

    def test_no_expansion(self):
        assert split_command("clang -I$OUT/include *.c `pwd`") == [
            "clang", "-I$OUT/include", "*.c", "`pwd`",
        ]

    def test_hash_is_not_a_comment(self):
        assert split_command("clang -DX=#y a.c") == ["clang", "-DX=#y", "a.c"]

    def test_empty_quotes_yield_empty_token(self):
        assert split_command('clang "" a.c') == ["clang", "", "a.c"]

    def test_empty_command(self):
        assert split_command("") == []
        assert split_command("   ") == []


@pytest.mark.error_handling
class TestSplitCommandErrors:

    @pytest.mark.parametrize("command", [
        'clang "-DX=unterminated',
        "clang '-DX=unterminated",
        "clang -c a.c \\",
    ])
    def test_unterminated_input_fails(self, command):
        with pytest.raises(TokenizeError) as exc_info:
            split_command(command)
        assert exc_info.value.command == command


class TestHashWords:

    def test_word_starting_with_hash_is_kept(self):
        """'#' never starts a comment; a build command has no comments to drop."""
        assert split_command("clang -c a.c #x") == ["clang", "-c", "a.c", "#x"]
