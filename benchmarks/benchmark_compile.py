"""Benchmark the Tessera lexer and parser.

Run with:
    pytest benchmarks/benchmark_compile.py -v --benchmark-only
"""

import pytest

from tessera import Compiler, DictParseCache, lex, parse
from tessera.lexer import Lexer
from tessera.parser import Parser


@pytest.mark.benchmark(group="lex")
def test_benchmark_lex_large_template(benchmark, large_template):  # type: ignore[no-untyped-def]
    tokens = benchmark(lex, large_template)
    assert tokens


@pytest.mark.benchmark(group="parse")
def test_benchmark_parse_tokens_only(benchmark, large_template):  # type: ignore[no-untyped-def]
    """Parser cost alone, on a pre-lexed token list."""
    tokens = Lexer(large_template).tokenize()

    def parse_tokens():  # type: ignore[no-untyped-def]
        return Parser(tokens).parse()

    children = benchmark(parse_tokens)
    assert children


@pytest.mark.benchmark(group="compile")
def test_benchmark_compile_large_template(benchmark, large_template):  # type: ignore[no-untyped-def]
    program = benchmark(parse, large_template)
    assert program.children


@pytest.mark.benchmark(group="compile")
def test_benchmark_compile_real_world(benchmark, real_world_templates):  # type: ignore[no-untyped-def]
    compiler = Compiler()

    def compile_all():  # type: ignore[no-untyped-def]
        return compiler.compile_many(real_world_templates)

    programs = benchmark(compile_all)
    assert len(programs) == len(real_world_templates)


@pytest.mark.benchmark(group="compile")
def test_benchmark_compile_cached(benchmark, large_template):  # type: ignore[no-untyped-def]
    """Cache hits cost one hash of the source."""
    cache = DictParseCache()
    first = parse(large_template, cache=cache)

    program = benchmark(parse, large_template, cache=cache)
    assert program is first
