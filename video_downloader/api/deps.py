from video_downloader.services.batch import BatchCoordinator
from video_downloader.services.download import DownloadOrchestrator
from video_downloader.services.info import MetadataExtractor
from video_downloader.services.probe import ToolAvailabilityProbe
from video_downloader.services.qr import LinkEncoder
from video_downloader.services.scratch import ScratchSpace
from video_downloader.services.ytdlp import ytdlp_tool

scratch_space = ScratchSpace()
probe = ToolAvailabilityProbe(ytdlp_tool)
extractor = MetadataExtractor(ytdlp_tool, probe)
orchestrator = DownloadOrchestrator(ytdlp_tool, probe, scratch_space)
batch_coordinator = BatchCoordinator(extractor, probe)
link_encoder = LinkEncoder()

def get_scratch_space() -> ScratchSpace:
    return scratch_space

def get_extractor() -> MetadataExtractor:
    return extractor

def get_orchestrator() -> DownloadOrchestrator:
    return orchestrator

def get_batch_coordinator() -> BatchCoordinator:
    return batch_coordinator

def get_link_encoder() -> LinkEncoder:
    return link_encoder
