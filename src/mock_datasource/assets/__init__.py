"""Assets package init.

Assets are not re-exported here; import them from their modules, e.g.

    from mock_datasource.assets.datasets import mock_dataset_tables

The public entrypoint is mock_datasource.definitions.
"""
