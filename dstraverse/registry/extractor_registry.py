from dstraverse.catalog import load_catalog
from dstraverse.extractors.design_system_extractor import DesignSystemExtractor
from dstraverse.extractors.node_kinds import load_profiles


def get_extractor(language: str, catalog=None, profiles_path=None):
    lang = language.lower()
    profiles = load_profiles(profiles_path)
    if lang not in profiles:
        raise ValueError(f"No extractor for language: {language}")
    if catalog is None:
        catalog = load_catalog()
    return DesignSystemExtractor(profile=profiles[lang], catalog=catalog)
