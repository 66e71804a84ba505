from .json_loader import dump_result_file, load_dataset

__all__ = ["dump_result_file", "load_dataset"]
