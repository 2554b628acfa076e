"""
Unit tests for FunctionLoader
"""

import pytest
import os

from partition_reduce.function_loader import FunctionLoader


class TestFunctionLoaderBasics:
    """Tests for basic loading functionality"""

    def test_loads_valid_job_file(self, wordcount_job_file):
        loader = FunctionLoader(wordcount_job_file)
        module = loader.load_module()

        assert module is not None
        assert hasattr(module, 'reduce_function')

    def test_raises_error_for_nonexistent_file(self):
        loader = FunctionLoader('/nonexistent/file.py')

        with pytest.raises(FileNotFoundError):
            loader.load_module()

    def test_get_reduce_function_loads_module_automatically(self, wordcount_job_file):
        loader = FunctionLoader(wordcount_job_file)
        reduce_func = loader.get_reduce_function()

        assert callable(reduce_func)
        assert loader.module is not None


class TestFunctionLoaderReduceFunction:
    """Tests for reduce function loading"""

    def test_wordcount_reduce_sums_counts(self, wordcount_job_file):
        reduce_func = FunctionLoader(wordcount_job_file).get_reduce_function()
        assert reduce_func('hello', ['1', '1', '3']) == '5'

    def test_inverted_index_reduce_dedupes_documents(self, inverted_index_job_file):
        reduce_func = FunctionLoader(inverted_index_job_file).get_reduce_function()
        assert reduce_func('fox', ['b.txt', 'a.txt', 'b.txt']) == '2 a.txt,b.txt'

    def test_raises_error_when_reduce_function_missing(self, temp_dir):
        invalid_file = os.path.join(temp_dir, 'invalid.py')
        with open(invalid_file, 'w') as f:
            f.write("def map_function(key, value):\n    return []\n")

        with pytest.raises(AttributeError, match='reduce_function'):
            FunctionLoader(invalid_file).get_reduce_function()

    def test_raises_error_when_reduce_function_not_callable(self, temp_dir):
        invalid_file = os.path.join(temp_dir, 'not_callable.py')
        with open(invalid_file, 'w') as f:
            f.write("reduce_function = 42\n")

        with pytest.raises(AttributeError):
            FunctionLoader(invalid_file).get_reduce_function()
