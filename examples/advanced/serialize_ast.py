"""Cache a compiled template to disk - JSON round-trip."""

from tessera import parse
from tessera.serialization import from_json, to_json

program = parse("{{ for post of posts }}<h2>{{ post.title }}</h2>{{ end }}")

json_str = to_json(program)
restored = from_json(json_str)

print("Original == restored:", program == restored)
print("JSON length:", len(json_str), "chars")
