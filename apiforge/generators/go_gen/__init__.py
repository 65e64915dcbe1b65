from apiforge.generators.go_gen.generator import generate_go_code

__all__ = ["generate_go_code"]
