from apiforge.generators.java_gen.generator import generate_java_code

__all__ = ["generate_java_code"]
