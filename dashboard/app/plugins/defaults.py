"""
Copyright (c) 2024, 2026, Oracle and/or its affiliates.
Licensed under the Universal Permissive License v1.0 as shown at http://oss.oracle.com/licenses/upl.

Built-in plugin metadata registered at startup.
"""
# spell-checker:ignore opentsdb cloudwatch singlestat alertlist dashlist pluginlist

# fmt: off
DEFAULT_DATASOURCE_PLUGINS: list[dict] = [
    {'id': 'graphite', 'name': 'Graphite', 'metrics': True, 'annotations': True,
     'info': {'description': 'Graphite time-series database'}},
    {'id': 'influxdb_08', 'name': 'InfluxDB 0.8.x', 'metrics': True, 'annotations': True,
     'info': {'description': 'InfluxDB 0.8 time-series database'}},
    {'id': 'influxdb', 'name': 'InfluxDB', 'metrics': True, 'annotations': True,
     'info': {'description': 'InfluxDB time-series database'}},
    {'id': 'elasticsearch', 'name': 'Elasticsearch', 'metrics': True, 'annotations': True,
     'info': {'description': 'Elasticsearch search and log index'}},
    {'id': 'prometheus', 'name': 'Prometheus', 'metrics': True,
     'info': {'description': 'Prometheus monitoring system'}},
    {'id': 'opentsdb', 'name': 'OpenTSDB', 'metrics': True,
     'info': {'description': 'OpenTSDB time-series database'}},
    {'id': 'cloudwatch', 'name': 'CloudWatch', 'metrics': True,
     'info': {'description': 'Amazon CloudWatch metrics'}},
    {'id': 'grafana', 'name': 'Grafana', 'metrics': True, 'built_in': True,
     'info': {'description': 'Built-in test data and annotations'}},
    {'id': 'mixed', 'name': 'Mixed datasource', 'metrics': True, 'built_in': True, 'mixed': True,
     'info': {'description': 'Query several data sources from one panel'}},
]

DEFAULT_PANEL_PLUGINS: list[dict] = [
    {'id': 'graph', 'name': 'Graph'},
    {'id': 'singlestat', 'name': 'Singlestat'},
    {'id': 'table', 'name': 'Table'},
    {'id': 'text', 'name': 'Text'},
    {'id': 'alertlist', 'name': 'Alert List'},
    {'id': 'dashlist', 'name': 'Dashboard list'},
    {'id': 'pluginlist', 'name': 'Plugin list'},
]
# fmt: on


def builtin_paths(plugin_type: str, plugin_id: str) -> dict[str, str]:
    """Return the module path and base URL for a plugin shipped with the server."""

    return {
        'module': f'app/plugins/{plugin_type}/{plugin_id}/module',
        'base_url': f'public/app/plugins/{plugin_type}/{plugin_id}',
    }


def external_paths(plugin_id: str) -> dict[str, str]:
    """Return the module path and base URL for a plugin discovered on disk."""

    return {
        'module': f'plugins/{plugin_id}/module',
        'base_url': f'public/plugins/{plugin_id}',
    }
