"""Components that read system state for a status line."""