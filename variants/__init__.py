from variants.id_builder import VariantIdBuilder
