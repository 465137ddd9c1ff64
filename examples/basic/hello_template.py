"""Compile a template in 3 lines - zero config, zero deps."""

from tessera import parse

program = parse("Hello {{ user.name }}!{{ if admin }} (admin){{ end }}")
for node in program.children:
    print(node)
