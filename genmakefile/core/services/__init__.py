"""
Services — the generation pipeline.

    escaping        path → rule token / command token
    filter_builder  extension set → find expression
    rule_generator  traversal → Makefile text blocks
    output_writer   text blocks → stdout
"""
