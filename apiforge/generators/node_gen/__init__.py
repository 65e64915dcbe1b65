from apiforge.generators.node_gen.generator import generate_node_code

__all__ = ["generate_node_code"]
