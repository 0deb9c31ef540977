import importlib

mod = "graphqlize"
class LazyLoader:
    """    
    Lazy loader for the graphqlize functions to speed up startup time.    
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, func_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, func_name)
        else:
            return self._load_module(f"{mod}.{item}")

# Define the functions and their corresponding module paths
_mappings = {
    "new_registry": (f"{mod}.typeregistry", "new_registry"),
    "TypeRegistry": (f"{mod}.typeregistry", "TypeRegistry"),
    "convert": (f"{mod}.jsonstographql", "convert"),
    "convert_documents": (f"{mod}.jsonstographql", "convert_documents"),
    "build_graphql_schema": (f"{mod}.jsonstographql", "build_graphql_schema"),
    "print_registry_sdl": (f"{mod}.jsonstographql", "print_registry_sdl"),
    "convert_jsons_to_graphql": (f"{mod}.jsonstographql", "convert_jsons_to_graphql"),
    "get_convert_enum_from_graphql_code": (f"{mod}.enumcode", "get_convert_enum_from_graphql_code"),
    "convert_jsons_enums_to_python": (f"{mod}.enumcode", "convert_jsons_enums_to_python"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
