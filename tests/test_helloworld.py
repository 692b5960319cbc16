"""
End-to-end tests: source text -> lexer -> translator -> StandardVm,
output captured in a buffer.
"""
import io
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from brainvm import run_source
from brainvm.lexer import parse
from brainvm.translator import translate
from brainvm.vm import StandardVm, VmConfig


def _run_program(source: str) -> bytes:
    tokens = parse(io.BytesIO(source.encode("ascii")))
    program = translate(tokens)
    output = io.BytesIO()
    vm = StandardVm(VmConfig(output=output, input=io.BytesIO()))
    vm.run(program)
    return output.getvalue()


class TestHelloWorld:
    def test_base_helloworld(self):
        result = _run_program(
            "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
            ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
        )
        assert result == b"Hello World!\n"

    def test_overflow_helloworld(self):
        result = _run_program(
            ">++++++++[-<+++++++++>]<.>>+>-[+]++>++>+++[>[->+++<<+++>]<<]>-----.>->\n"
            "    +++..+++.>-.<<+[>[+>+]>>]<--------------.>>.+++.------.--------.>+.>+."
        )
        assert result == b"Hello World!\n"

    def test_short_helloworld(self):
        result = _run_program(
            "--<-<<+[+[<+>--->->->-<<<]>]<<--.<++++++.<<-..<<.<+.>>.>>.<<<.+++.>>.>>-.<<<+."
        )
        assert result == b"Hello, World!"

    def test_shortest_helloworld(self):
        result = _run_program(
            "+[-->-[>>+>-----<<]<--<---]>-.>>>+.>>..+++[.>]<<<<.+++.------.<<-.>>>>+."
        )
        assert result == b"Hello, World!"

    def test_run_source_pipeline(self):
        out = io.BytesIO()
        vm = run_source(
            "+[-->-[>>+>-----<<]<--<---]>-.>>>+.>>..+++[.>]<<<<.+++.------.<<-.>>>>+.",
            output=out, input=io.BytesIO(),
        )
        assert out.getvalue() == b"Hello, World!"
        assert vm.instruction_pointer == len(vm.program)

    def test_commented_source(self):
        out = io.BytesIO()
        run_source(
            "print an exclamation mark: thirty three is four times eight plus one\n"
            "++++[>++++++++<-]>+ .",
            output=out, input=io.BytesIO(),
        )
        assert out.getvalue() == b"!"
