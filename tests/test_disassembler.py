import io
from pathlib import Path

from x86disasm import Disassembler, InstructionTextRenderer, UnknownInstructionError

LISTING = (
    b"\x8b\xd8"  # mov bx, ax
    b"\xb9\x0c\x00"  # mov cx, 12
    b"\x83\xc6\x02"  # add si, 2
    b"\x75\xf6"  # jne -> offset 0
    b"\x3c\xe2"  # cmp al, -30
    b"\x74\xfa"  # je -> offset 8
)


def test_listing_for_mixed_program():
    listing = Disassembler().generate_listing(LISTING)

    assert listing.ok
    assert listing.lines == [
        "mov bx, ax",
        "mov cx, 12",
        "add si, 2",
        "jne label_0",
        "cmp al, -30",
        "je label_1",
    ]
    assert listing.labels == {0: "label_0", 8: "label_1"}
    assert listing.render().endswith("je label_1\n")


def test_listing_is_independent_of_chunk_size():
    expected = Disassembler().generate_listing(LISTING).lines

    for chunk_size in (1, 2, 3, 7):
        listing = Disassembler(chunk_size=chunk_size).generate_listing(io.BytesIO(LISTING))
        assert listing.lines == expected


def test_each_run_gets_fresh_labels():
    disassembler = Disassembler()
    first = disassembler.generate_listing(b"\x74\x00")
    second = disassembler.generate_listing(b"\x89\xd9\x74\x10")

    assert first.lines == ["je label_0"]
    assert second.lines == ["mov cx, bx", "je label_0"]


def test_unknown_instruction_halts_after_prior_lines():
    listing = Disassembler().generate_listing(b"\x89\xd9\xf4\x89\xd9")

    assert not listing.ok
    assert listing.lines == ["mov cx, bx"]
    assert isinstance(listing.error, UnknownInstructionError)
    assert listing.error.byte == 0xF4
    assert listing.error.position == 2


def test_empty_input_produces_empty_listing():
    listing = Disassembler().generate_listing(b"")

    assert listing.ok
    assert listing.lines == []
    assert listing.render() == ""


def test_max_instructions_truncates():
    listing = Disassembler().generate_listing(LISTING, max_instructions=2)

    assert listing.lines == ["mov bx, ax", "mov cx, 12", "; ... truncated ..."]


def test_label_footer():
    listing = Disassembler().generate_listing(b"\x74\x02\x74\x00", show_labels=True)

    assert listing.lines == [
        "je label_0",
        "je label_0",
        "; labels",
        ";   label_0 = 4",
    ]


def test_label_footer_without_branches():
    listing = Disassembler().generate_listing(b"\x89\xd9", show_labels=True)

    assert listing.lines[-2:] == ["; labels", ";   (none)"]


def test_offsets_in_listing():
    renderer = InstructionTextRenderer(show_offsets=True)
    listing = Disassembler(renderer).generate_listing(b"\x89\xd9\xb1\x0c")

    assert listing.lines == ["00000000: mov cx, bx", "00000002: mov cl, 12"]


def test_write_listing(tmp_path: Path):
    output_path = tmp_path / "out.asm"

    listing = Disassembler().write_listing(b"\x8b\xd8", output_path)

    assert listing.ok
    assert output_path.read_text("utf-8") == "mov bx, ax\n"


def test_max_instructions_does_not_decode_past_the_cap():
    listing = Disassembler().generate_listing(b"\x89\xd9\xf4", max_instructions=1)

    assert listing.ok
    assert listing.lines == ["mov cx, bx", "; ... truncated ..."]


def test_branch_past_the_cap_mints_no_label():
    listing = Disassembler().generate_listing(
        b"\x89\xd9\x74\x05", max_instructions=1, show_labels=True
    )

    assert listing.lines == ["mov cx, bx", "; ... truncated ...", "; labels", ";   (none)"]
    assert listing.labels == {}


def test_max_instructions_matching_input_length_adds_no_marker():
    listing = Disassembler().generate_listing(b"\x89\xd9", max_instructions=1)

    assert listing.lines == ["mov cx, bx"]


def test_iter_instructions_respects_cap():
    decoded = list(Disassembler().iter_instructions(b"\x89\xd9\xf4", max_instructions=1))

    assert [instruction.mnemonic for instruction in decoded] == ["mov"]
