"""Bitmovin encodings: submission, status mapping and cancellation.

A job becomes one Bitmovin encoding reading from an S3 input and writing to
an S3 output under ``<destination>/<job id>/``. Progressive jobs get one MP4
muxing per output. HLS jobs get TS muxings plus an HLS manifest, which
Bitmovin only generates once the encoding itself has finished; the manifest
id is kept in the encoding's custom data so that ``job_status`` can start and
wait for it without any local state.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from ...config import Settings
from ...errors import (
    DuplicateOutputError,
    InvalidConfigError,
    MissingRequiredFieldError,
    RemoteServiceError,
)
from ...storage import resolve_storage_location
from ...types import Job, JobStatus, Status, StorageLocation, TranscodeOutput
from .client import NAME, BitmovinClient
from .presets import AUDIO_REFERENCE_KEY, BitmovinPreset, get_preset

logger = logging.getLogger(__name__)

ENCODINGS_PATH = "encoding/encodings"
S3_INPUTS_PATH = "encoding/inputs/s3"
S3_OUTPUTS_PATH = "encoding/outputs/s3"
HLS_MANIFESTS_PATH = "encoding/manifests/hls"

MANIFEST_REFERENCE_KEY = "manifest"
DESTINATION_KEY = "destination"

DEFAULT_SEGMENT_DURATION = 4  # seconds

_ENCODING_STATUS = {
    "CREATED": Status.QUEUED,
    "QUEUED": Status.QUEUED,
    "RUNNING": Status.RUNNING,
    "ERROR": Status.FAILED,
    "TRANSFER_ERROR": Status.FAILED,
    "CANCELED": Status.CANCELED,
}

TERMINAL_REMOTE_STATES = {"FINISHED", "ERROR", "TRANSFER_ERROR", "CANCELED"}


def _s3_resource(location: StorageLocation, settings: Settings, name: str) -> dict[str, Any]:
    if not settings.bitmovin_aws_access_key_id or not settings.bitmovin_aws_secret_access_key:
        raise InvalidConfigError(
            "BITMOVIN_AWS_ACCESS_KEY_ID and BITMOVIN_AWS_SECRET_ACCESS_KEY must be configured"
        )
    return {
        "name": name,
        "bucketName": location.bucket_name,
        "cloudRegion": location.region.value,
        "accessKey": settings.bitmovin_aws_access_key_id,
        "secretKey": settings.bitmovin_aws_secret_access_key,
    }


def _destination(settings: Settings) -> StorageLocation:
    if not settings.bitmovin_destination:
        raise InvalidConfigError("BITMOVIN_DESTINATION is not configured")
    location = resolve_storage_location(settings.bitmovin_destination)
    # The destination is a prefix; a missing trailing slash leaves its last segment in file_name.
    bucket_name = "/".join(part for part in (location.bucket_name, location.file_name) if part)
    return StorageLocation(file_name="", bucket_name=bucket_name, region=location.region)


def _output_target(output_id: str, output_path: str) -> dict[str, Any]:
    return {
        "outputId": output_id,
        "outputPath": output_path,
        "acl": [{"permission": "PUBLIC_READ"}],
    }


def _create_stream(
    client: BitmovinClient,
    encoding_id: str,
    codec_config_id: str,
    input_id: str,
    input_path: str,
) -> str:
    return client.create(
        "create_stream",
        f"{ENCODINGS_PATH}/{encoding_id}/streams",
        {
            "codecConfigId": codec_config_id,
            "inputStreams": [
                {"inputId": input_id, "inputPath": input_path, "selectionMode": "AUTO"},
            ],
        },
    )


def _create_ts_muxing(
    client: BitmovinClient,
    encoding_id: str,
    stream_id: str,
    output_id: str,
    output_path: str,
    segment_length: int,
) -> str:
    return client.create(
        "create_ts_muxing",
        f"{ENCODINGS_PATH}/{encoding_id}/muxings/ts",
        {
            "segmentLength": segment_length,
            "segmentNaming": "seg_%number%.ts",
            "streams": [{"streamId": stream_id}],
            "outputs": [_output_target(output_id, output_path)],
        },
    )


def _add_mp4_outputs(
    client: BitmovinClient,
    job: Job,
    encoding_id: str,
    video_streams: dict[str, str],
    audio_streams: dict[str, str],
    presets: dict[str, BitmovinPreset],
    output_id: str,
) -> None:
    for output in job.outputs:
        audio_config_id = presets[output.preset_id].video.custom_data[AUDIO_REFERENCE_KEY]
        client.create(
            "create_mp4_muxing",
            f"{ENCODINGS_PATH}/{encoding_id}/muxings/mp4",
            {
                "filename": output.file_name,
                "streams": [
                    {"streamId": video_streams[output.file_name]},
                    {"streamId": audio_streams[audio_config_id]},
                ],
                "outputs": [_output_target(output_id, job.id)],
            },
        )


def _playlist_names(output: TranscodeOutput) -> tuple[str, str]:
    """Return (segment directory, variant playlist file name) for an HLS output."""
    stem = output.file_name.rsplit(".", 1)[0] if "." in output.file_name else output.file_name
    playlist = output.file_name if output.file_name.endswith(".m3u8") else f"{stem}.m3u8"
    return stem, playlist


def _add_hls_outputs(
    client: BitmovinClient,
    job: Job,
    encoding_id: str,
    manifest_id: str,
    video_streams: dict[str, str],
    audio_streams: dict[str, str],
    presets: dict[str, BitmovinPreset],
    output_id: str,
) -> None:
    segment_length = job.streaming_params.segment_duration or DEFAULT_SEGMENT_DURATION

    audio_groups: dict[str, str] = {}
    for index, (audio_config_id, stream_id) in enumerate(audio_streams.items()):
        group_id = f"audio_{index}"
        segment_path = f"audio/{group_id}"
        muxing_id = _create_ts_muxing(
            client, encoding_id, stream_id, output_id, f"{job.id}/{segment_path}", segment_length
        )
        client.create(
            "create_manifest_audio_media",
            f"{HLS_MANIFESTS_PATH}/{manifest_id}/media/audio",
            {
                "name": group_id,
                "groupId": group_id,
                "language": "und",
                "uri": f"{group_id}.m3u8",
                "segmentPath": segment_path,
                "encodingId": encoding_id,
                "streamId": stream_id,
                "muxingId": muxing_id,
            },
        )
        audio_groups[audio_config_id] = group_id

    for output in job.outputs:
        segment_path, playlist = _playlist_names(output)
        stream_id = video_streams[output.file_name]
        muxing_id = _create_ts_muxing(
            client, encoding_id, stream_id, output_id, f"{job.id}/{segment_path}", segment_length
        )
        audio_config_id = presets[output.preset_id].video.custom_data[AUDIO_REFERENCE_KEY]
        client.create(
            "create_manifest_variant",
            f"{HLS_MANIFESTS_PATH}/{manifest_id}/streams",
            {
                "audio": audio_groups[audio_config_id],
                "closedCaptions": "NONE",
                "uri": playlist,
                "segmentPath": segment_path,
                "encodingId": encoding_id,
                "streamId": stream_id,
                "muxingId": muxing_id,
            },
        )


def transcode(client: BitmovinClient, settings: Settings, job: Job) -> str:
    """
    Submit a job as a Bitmovin encoding and start it.

    Args:
        client: Bitmovin client
        settings: Provides the destination, S3 credentials and encoder settings
        job: Job to submit; every output must reference a registered preset

    Returns:
        The encoding id, used as the provider job id

    The input, output, manifest and encoding are created one call at a time.
    If a later call fails, the resources created before it are left on the
    Bitmovin account and the encoding is never started.
    """
    if not job.outputs:
        raise MissingRequiredFieldError("outputs")
    file_names: set[str] = set()
    for output in job.outputs:
        # Streams and muxings are keyed by file name.
        if output.file_name in file_names:
            raise DuplicateOutputError(output.file_name)
        file_names.add(output.file_name)

    source = resolve_storage_location(job.source_media)
    destination = _destination(settings)

    presets: dict[str, BitmovinPreset] = {}
    for output in job.outputs:
        if output.preset_id not in presets:
            presets[output.preset_id] = get_preset(client, output.preset_id)

    input_id = client.create("create_input", S3_INPUTS_PATH, _s3_resource(source, settings, f"input-{job.id}"))
    output_id = client.create("create_output", S3_OUTPUTS_PATH, _s3_resource(destination, settings, f"output-{job.id}"))

    custom_data: dict[str, Any] = {
        DESTINATION_KEY: f"{settings.bitmovin_destination.rstrip('/')}/{job.id}/",
    }
    manifest_id = None
    if job.is_hls:
        manifest_id = client.create(
            "create_manifest",
            HLS_MANIFESTS_PATH,
            {
                "name": f"manifest-{job.id}",
                "manifestName": job.streaming_params.playlist_file_name,
                "outputs": [_output_target(output_id, job.id)],
            },
        )
        custom_data[MANIFEST_REFERENCE_KEY] = manifest_id

    encoding_id = client.create(
        "create_encoding",
        ENCODINGS_PATH,
        {
            "name": f"encoding-{job.id}",
            "cloudRegion": settings.bitmovin_encoding_region,
            "encoderVersion": settings.bitmovin_encoding_version,
            "customData": custom_data,
        },
    )

    # One audio stream per distinct AAC configuration, shared by every output using it.
    audio_streams: dict[str, str] = {}
    for preset in presets.values():
        audio_config_id = preset.video.custom_data[AUDIO_REFERENCE_KEY]
        if audio_config_id not in audio_streams:
            audio_streams[audio_config_id] = _create_stream(
                client, encoding_id, audio_config_id, input_id, source.file_name
            )

    video_streams = {
        output.file_name: _create_stream(client, encoding_id, output.preset_id, input_id, source.file_name)
        for output in job.outputs
    }

    if manifest_id:
        _add_hls_outputs(client, job, encoding_id, manifest_id, video_streams, audio_streams, presets, output_id)
    else:
        _add_mp4_outputs(client, job, encoding_id, video_streams, audio_streams, presets, output_id)

    client.post("start_encoding", f"{ENCODINGS_PATH}/{encoding_id}/start")
    logger.info(f"Started Bitmovin encoding {encoding_id} for job {job.id} ({len(job.outputs)} outputs)")
    return encoding_id


def _error_text(result: dict[str, Any]) -> str:
    messages = result.get("messages") or []
    errors = [m.get("text", "") for m in messages if m.get("type") == "ERROR" and m.get("text")]
    return "\n".join(errors)


def _wait_for_manifest(client: BitmovinClient, settings: Settings, manifest_id: str) -> dict[str, Any]:
    """
    Start the manifest if needed and poll it until it ends or the wait times out.

    Returns the last manifest status payload.
    """
    deadline = time.monotonic() + settings.manifest_wait_timeout_seconds
    started = False
    while True:
        result = client.get("get_manifest_status", f"{HLS_MANIFESTS_PATH}/{manifest_id}/status")
        manifest_status = result.get("status", "")
        if manifest_status in TERMINAL_REMOTE_STATES:
            return result
        if manifest_status == "CREATED" and not started:
            client.post("start_manifest", f"{HLS_MANIFESTS_PATH}/{manifest_id}/start")
            started = True
            logger.info(f"Started HLS manifest {manifest_id}")

        if time.monotonic() >= deadline:
            return result
        logger.debug(f"HLS manifest {manifest_id} is {manifest_status}, waiting...")
        time.sleep(settings.manifest_poll_interval_seconds)


def _finished_status(
    client: BitmovinClient,
    settings: Settings,
    job_status: JobStatus,
) -> JobStatus:
    encoding_id = job_status.provider_job_id
    result = client.get("get_encoding_custom_data", f"{ENCODINGS_PATH}/{encoding_id}/customData")
    custom_data = result.get("customData") or {}

    destination = custom_data.get(DESTINATION_KEY)
    if isinstance(destination, str):
        job_status.output_destination = destination

    manifest_id = custom_data.get(MANIFEST_REFERENCE_KEY)
    job_status.progress = 100
    if manifest_id is None:
        job_status.status = Status.FINISHED
        return job_status
    if not isinstance(manifest_id, str):
        raise RemoteServiceError(
            "get_encoding_custom_data", f"manifest reference is not a string: {manifest_id!r}"
        )

    manifest = _wait_for_manifest(client, settings, manifest_id)
    job_status.provider_status["manifest"] = manifest
    manifest_status = manifest.get("status", "")
    if manifest_status == "FINISHED":
        job_status.status = Status.FINISHED
    elif manifest_status in TERMINAL_REMOTE_STATES:
        job_status.status = Status.FAILED
        job_status.status_message = f"manifest generation failed: {_error_text(manifest) or manifest_status}"
    else:
        job_status.status = Status.RUNNING
        job_status.status_message = "encoding finished, generating manifest"
    return job_status


def job_status(client: BitmovinClient, settings: Settings, provider_job_id: str) -> JobStatus:
    """
    Map a Bitmovin encoding to a canonical status.

    A finished encoding with an HLS manifest is only reported finished once
    the manifest has been generated.
    """
    result = client.get("get_encoding_status", f"{ENCODINGS_PATH}/{provider_job_id}/status")
    remote_status = result.get("status", "")
    status = JobStatus(
        provider_name=NAME,
        provider_job_id=provider_job_id,
        status=_ENCODING_STATUS.get(remote_status, Status.UNKNOWN),
        progress=result.get("progress"),
        provider_status={"encoding": result},
    )

    if remote_status == "FINISHED":
        return _finished_status(client, settings, status)
    if status.status == Status.FAILED:
        status.status_message = _error_text(result) or "encoding failed"
    elif status.status == Status.UNKNOWN:
        logger.warning(f"Unknown Bitmovin status {remote_status!r} for encoding {provider_job_id}")
    return status


def cancel_job(client: BitmovinClient, provider_job_id: str) -> None:
    result = client.get("get_encoding_status", f"{ENCODINGS_PATH}/{provider_job_id}/status")
    remote_status = result.get("status", "")
    if remote_status in TERMINAL_REMOTE_STATES:
        logger.warning(f"Encoding {provider_job_id} already {remote_status}, nothing to cancel")
        return
    client.post("stop_encoding", f"{ENCODINGS_PATH}/{provider_job_id}/stop")
    logger.info(f"Stopped Bitmovin encoding {provider_job_id}")


def healthcheck(client: BitmovinClient) -> None:
    client.get("healthcheck", ENCODINGS_PATH, params={"offset": 0, "limit": 1})
