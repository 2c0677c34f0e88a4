"""Tests for ResumeAnalyzer with a mocked LLM."""

import pytest

from resume_studio.errors import CompletionError
from resume_studio.models.analysis import AnalysisResult
from resume_studio.models.resume import ResumeData
from resume_studio.pipeline.resume_analyzer import ResumeAnalyzer

ANALYSIS_REPLY = {
    "atsScore": 81,
    "scoreBreakdown": [{"category": "Keyword Optimization", "score": 75}],
    "strengths": ["Clear"],
    "weaknesses": ["Vague"],
    "suggestions": ["Add metrics"],
    "keywords": [{"keyword": "Python", "frequency": 3}],
    "skillsGap": [{"skill": "Terraform", "importance": 4, "category": "Technical"}],
}


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_analyze(self, mock_llm_client):
        mock_llm_client.generate_json.return_value = ANALYSIS_REPLY
        result = await ResumeAnalyzer(mock_llm_client).analyze("Jane Doe resume")

        assert isinstance(result, AnalysisResult)
        assert result.ats_score == 81
        assert result.skills_gap[0].skill == "Terraform"
        assert "Jane Doe resume" in mock_llm_client.generate_json.call_args.kwargs["prompt"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reply", [{}, [], {"atsScore": 70}, {"scoreBreakdown": [{"category": "x", "score": 1}]}])
    async def test_incomplete_reply_raises(self, mock_llm_client, reply):
        mock_llm_client.generate_json.return_value = reply
        with pytest.raises(CompletionError, match="Failed to analyze resume"):
            await ResumeAnalyzer(mock_llm_client).analyze("text")

    @pytest.mark.asyncio
    async def test_out_of_range_score_raises(self, mock_llm_client):
        mock_llm_client.generate_json.return_value = {**ANALYSIS_REPLY, "atsScore": 140}
        with pytest.raises(CompletionError):
            await ResumeAnalyzer(mock_llm_client).analyze("text")

    @pytest.mark.asyncio
    async def test_service_failure_raises(self, mock_llm_client):
        mock_llm_client.generate_json.side_effect = ValueError("Could not extract JSON")
        with pytest.raises(CompletionError, match="Could not extract JSON"):
            await ResumeAnalyzer(mock_llm_client).analyze("text")


class TestRectify:
    @pytest.mark.asyncio
    async def test_prompt_carries_feedback(self, mock_llm_client, sample_analysis):
        mock_llm_client.generate_json.return_value = {"fullName": "Jane Doe", "skills": "Python, Docker"}
        analyzer = ResumeAnalyzer(mock_llm_client, temperature=0.6)
        result = await analyzer.rectify("old resume", sample_analysis)

        assert isinstance(result, ResumeData)
        assert result.skills == "Python, Docker"
        kwargs = mock_llm_client.generate_json.call_args.kwargs
        assert "Few metrics" in kwargs["prompt"]
        assert "Quantify achievements" in kwargs["prompt"]
        assert "Docker" in kwargs["prompt"]
        assert kwargs["temperature"] == 0.6

    @pytest.mark.asyncio
    async def test_unusable_reply_raises(self, mock_llm_client, sample_analysis):
        mock_llm_client.generate_json.return_value = []
        with pytest.raises(CompletionError, match="Failed to improve resume"):
            await ResumeAnalyzer(mock_llm_client).rectify("old", sample_analysis)
