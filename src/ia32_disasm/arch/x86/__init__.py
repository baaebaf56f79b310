"""
x86 (32ビット) Architecture Package
"""
from .disassembler import decode_instructions, disassemble, format_listing
from .formatter import format_instruction
