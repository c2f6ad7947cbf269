from sqlconst.generators.constants_gen.generator import ConstantsGenerator, generate_constants

__all__ = ["ConstantsGenerator", "generate_constants"]
