"""
Compiler Pipeline Tests
=======================

Tests for toyc.lang.compiler: the complete C program text, compiler
results and stage ordering of errors.
"""

import pytest

from toyc.lang.compiler import (
    ToyCompiler,
    CompilerOptions,
    compile_toy,
    wrap_program,
    PROGRAM_HEADER,
    PROGRAM_FOOTER,
)
from toyc.lang.errors import CompilationError, UnknownCharacterError


class TestProgramText:
    """The generated C translation unit."""

    def test_single_assignment(self):
        assert compile_toy("x = 10;") == (
            "#include <stdio.h>\n"
            "int main() {\n"
            "    int x = 10;\n"
            "    return 0;\n"
            "}\n"
        )

    def test_empty_program(self):
        """An empty program is still a valid C main()."""
        assert compile_toy("") == PROGRAM_HEADER + PROGRAM_FOOTER

    def test_assign_and_print(self):
        program = compile_toy("x = 10; y = x + 5; print(y);")
        assert "    int x = 10;\n    int y = x + 5;\n" in program
        assert '    printf("%d\\n", y);\n' in program

    def test_if_else_is_indented_inside_main(self):
        program = compile_toy("x = 7; if (x > 5) { print(x); } else { print(0); }")
        assert (
            "    if (x > 5) {\n"
            '        printf("%d\\n", x);\n'
            "    }\n"
            "    else {\n"
            '        printf("%d\\n", 0);\n'
            "    }\n"
        ) in program

    def test_wrap_program(self):
        assert wrap_program("") == "#include <stdio.h>\nint main() {\n    return 0;\n}\n"


class TestCompilerResult:
    """Information collected along the pipeline."""

    def test_counts(self):
        result = ToyCompiler().compile_source("x = 10;\nprint(x);")
        assert result.success
        assert result.token_count == 9
        assert result.line_count == 2
        assert len(result.ast) == 2

    def test_node_count(self):
        """Literal, Assign, Statement and Program."""
        result = ToyCompiler().compile_source("x = 10;")
        assert result.node_count == 4

    def test_long_expression(self):
        """1200 operators: literals, binaries, Assign, Statement and Program."""
        options = CompilerOptions(max_tokens=2500)
        result = ToyCompiler(options).compile_source("x = 1" + " + 1" * 1200 + ";")
        assert result.node_count == 1201 + 1200 + 3
        assert result.body.startswith("    int x = " + "(" * 1199 + "1 + 1) + 1")

    def test_nesting_limit_is_a_compile_error(self):
        source = "if (x) { " * 100 + "}" * 100
        with pytest.raises(CompilationError) as exc_info:
            compile_toy(source, max_tokens=1000)
        assert exc_info.value.stage == "parsing"
        assert "blocks nested too deeply" in str(exc_info.value)

    def test_body_and_program(self):
        result = ToyCompiler().compile_source("x = 1;")
        assert result.body == "    int x = 1;\n"
        assert result.program == wrap_program(result.body)

    def test_warnings_are_collected(self):
        result = ToyCompiler().compile_source("if (x) { print(x);")
        assert len(result.warnings) == 1
        assert "warning" in result.warnings[0]

    def test_filename_defaults_to_options(self):
        compiler = ToyCompiler(CompilerOptions(filename="main.toy"))
        assert compiler.compile_source("x = 1;").filename == "main.toy"
        assert compiler.compile_source("x = 1;", "other.toy").filename == "other.toy"

    def test_compiler_is_reusable(self):
        """Compilations do not share state."""
        compiler = ToyCompiler()
        with pytest.raises(CompilationError):
            compiler.compile_source("x = @;")
        assert compiler.compile_source("x = 1;").success


class TestErrors:
    """Stage ordering and options validation."""

    def test_lexical_error_stops_before_parsing(self):
        """`x = @;` would also be a syntax error, but only lexing reports."""
        with pytest.raises(CompilationError) as exc_info:
            compile_toy("x = @;")
        assert exc_info.value.stage == "lexing"
        assert all(isinstance(e, UnknownCharacterError) for e in exc_info.value.errors)

    def test_syntax_error_stage(self):
        with pytest.raises(CompilationError) as exc_info:
            compile_toy("print x;")
        assert exc_info.value.stage == "parsing"

    def test_max_tokens_option(self):
        with pytest.raises(CompilationError):
            compile_toy("x = 1;", max_tokens=3)

    def test_invalid_max_tokens(self):
        with pytest.raises(ValueError):
            CompilerOptions(max_tokens=0)


class TestCompileFile:
    """Compiling from disk."""

    def test_compile_file(self, tmp_path):
        path = tmp_path / "prog.toy"
        path.write_text("x = 1;\n")
        result = ToyCompiler().compile_file(str(path))
        assert result.filename == str(path)
        assert "int x = 1;" in result.program

    def test_error_uses_filename(self, tmp_path):
        path = tmp_path / "bad.toy"
        path.write_text("x = #;\n")
        with pytest.raises(CompilationError) as exc_info:
            ToyCompiler().compile_file(str(path))
        assert f"{path}:1:5: error" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ToyCompiler().compile_file(str(tmp_path / "missing.toy"))
