__all__ = ['decode', 'diff', 'TraceConfig', 'load_config', 'TraceRecorder', 'TracingReader', 'map_spans', 'diff_records', 'to_bytes']

def __getattr__(name):
    if name in {'decode', 'diff'}:
        from . import debugger
        return getattr(debugger, name)
    if name in {'TraceConfig', 'load_config'}:
        from .config_manager import TraceConfig, load_config
        return {'TraceConfig': TraceConfig, 'load_config': load_config}[name]
    if name in {'TraceRecorder', 'TracingReader'}:
        from .trace.recorder import TraceRecorder, TracingReader
        return {'TraceRecorder': TraceRecorder, 'TracingReader': TracingReader}[name]
    if name == 'map_spans':
        from .trace.materialize import map_spans
        return map_spans
    if name == 'diff_records':
        from .trace.diff import diff_records
        return diff_records
    if name == 'to_bytes':
        from .inputs import to_bytes
        return to_bytes
    raise AttributeError(f"module 'fieldtrace' has no attribute '{name}'")
